"""
Exceptions for the remote_uploads library.
"""


class NoSuchStoreError(KeyError):
    def __init__(self, name):
        super(NoSuchStoreError, self).__init__(f"no such storage engine {name!r}")
        self.name = name


class InvalidRemotePathError(ValueError):
    def __init__(self, path, reason):
        super(InvalidRemotePathError, self).__init__(
            f"Invalid remote path {path!r}: {reason}."
        )
        self.path = path
        self.reason = reason
