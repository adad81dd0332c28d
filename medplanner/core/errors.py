class BackupError(Exception):
    """Base class for every export/import failure reported to the host"""


class MalformedBackup(BackupError):
    """The backup is not valid JSON, has wrong types, misses a required field or has an unsupported version"""


class StoreWriteFailure(BackupError):
    """The database rejected a write while restoring; the session was rolled back"""


class FileIOFailure(BackupError):
    """Reading or writing the chosen backup file failed"""
