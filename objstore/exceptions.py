"""Exception raised by every operation of the object store support layer."""


class ObjectStoreError(ValueError):
    """
    Raised for invalid arguments, unexpected filesystem state, malformed or
    incompatible encodings, and deletions outside the metadata directory.

    The message names the cause; there are no subclasses.
    """
    pass


def error(msg: str, *args) -> ObjectStoreError:
    """
    Build an ObjectStoreError with %-style formatting.

    Args:
        msg: Message template
        *args: Values substituted into the template

    Returns:
        ObjectStoreError ready to be raised
    """
    if args:
        msg = msg % args
    return ObjectStoreError(msg)
