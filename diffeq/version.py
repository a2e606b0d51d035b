PACKAGE_NAME = "diffeq"
PACKAGE_VERSION = "0.1.0"
PACKAGE_AUTHOR = "Nicholas Junge"
