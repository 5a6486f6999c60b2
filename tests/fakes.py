from collections import Counter
from datetime import datetime, timezone


def fixed_clock(year=2024, month=1, day=1, hour=9, minute=30):
    moment = datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    return lambda: moment


def id_sequence(*values):
    iterator = iter(values)
    return lambda: next(iterator)


class MemoryBlobStorage:
    """In-memory BlobStorage that records how often each call is made."""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.calls = Counter()
        self.reads = Counter()
        self.backups = []
        self.fail_backup = False
        self.fail_writes = False

    def read_text(self, path):
        self.calls["read_text"] += 1
        data = self.files.get(path)
        return data.decode("utf-8") if data is not None else ""

    def write_text(self, path, text):
        self.write_bytes(path, text.encode("utf-8"))

    def read_bytes(self, path):
        self.calls["read_bytes"] += 1
        self.reads[path] += 1
        return self.files.get(path)

    def write_bytes(self, path, data):
        self.calls["write"] += 1
        if self.fail_writes:
            raise OSError("disk full")
        self.files[path] = bytes(data)

    def delete_file(self, path):
        self.calls["delete_file"] += 1
        self.files.pop(path, None)

    def list_files(self, prefix=""):
        return sorted(path for path in self.files if path.startswith(prefix))

    def backup_file(self, path):
        self.calls["backup_file"] += 1
        if self.fail_backup or path not in self.files:
            return None
        name = f"{path}.bak{len(self.backups) + 1}"
        self.files[name] = self.files[path]
        self.backups.append(name)
        return name
