import logging

LOGGER_NAMESPACE = "SnapPanel"


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger under the SnapPanel namespace. Module names that already
    start with the package name are used as-is.
    """
    if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())
