import ast
import os

import setuptools


def read_package_metadata(path):
    # diffeq/__init__.py pulls in numpy and pandas, which are not yet installed at build time
    with open(path, "r", encoding="utf-8") as fh:
        tree = ast.parse(fh.read())

    return {target.id: ast.literal_eval(node.value)
            for node in tree.body if isinstance(node, ast.Assign)
            for target in node.targets}


metadata = read_package_metadata(os.path.join("diffeq", "version.py"))

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name=metadata["PACKAGE_NAME"],
    version=metadata["PACKAGE_VERSION"],
    author=metadata["PACKAGE_AUTHOR"],
    author_email="nicho.junge@gmail.com",
    description="Adaptive step size embedded Runge-Kutta integration of ODE initial value problems.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/njunge94/ode-explorer",
    packages=setuptools.find_packages(include=["diffeq", "diffeq.*"]),
    classifiers=[
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        "Operating System :: OS Independent",
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
    python_requires='>=3.8',
    install_requires=[
        "absl-py",
        "pandas",
        "numpy",
        "tqdm",
        "tabulate"
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy"
        ]
    }
)
