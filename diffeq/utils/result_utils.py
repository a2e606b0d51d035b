import json
import os
from typing import Dict, Text, Any

from diffeq.constants import ResultKeys, ConfigKeys, ModelMetadataKeys
from diffeq.utils.data_utils import result_to_frame, metrics_to_frame


def get_result_metadata(result: Dict[Text, Any]) -> Dict[Text, Any]:
    """
    Get metadata from a result.

    Args:
        result: Result object saved in an Integrator instance.

    Returns:
        A dict with run metadata information.
    """
    config = result[ResultKeys.CONFIG]

    metadata_keys = [ConfigKeys.TIMESTAMP, ConfigKeys.ID, ConfigKeys.METHOD,
                     ConfigKeys.START, ConfigKeys.END, ConfigKeys.NUM_STEPS]
    metadata = {k: config[k] for k in metadata_keys if k in config}

    return metadata


def write_result_to_disk(result: Dict[Text, Any], out_dir: Text, **kwargs):
    """
    Save a result to disk, including result data, metrics and additional info.

    Args:
        result: Result object saved in an Integrator instance.
        out_dir: Designated output directory.
        **kwargs: Additional keyword arguments passed to pandas.DataFrame.to_csv.
    """
    os.makedirs(out_dir, exist_ok=True)

    result_data = result[ResultKeys.RESULT_DATA]
    result_config = result[ResultKeys.CONFIG]

    kwargs.setdefault("index", False)

    result_to_frame(result_data, dim_names=result_config.get(ModelMetadataKeys.DIM_NAMES)).to_csv(
        os.path.join(out_dir, ResultKeys.RESULT_DATA + ".csv"), **kwargs)

    metrics_to_frame(result_data).to_csv(
        os.path.join(out_dir, ResultKeys.METRICS + ".csv"), **kwargs)

    outfile = os.path.join(out_dir, "result_info.json")
    with open(outfile, "w") as f:
        json.dump(result_config, f)
