from diffeq.metrics.metric import Metric, DistanceToSolution
