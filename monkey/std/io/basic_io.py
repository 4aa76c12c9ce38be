import os

from monkey.errors import MonkeyIOError


class BasicIO:
    """File access used by the `import` built-in."""

    def resolve(self, filename: str) -> str:
        return os.path.abspath(filename)

    def read_source(self, filename: str) -> str:
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise MonkeyIOError('file not found')
        except IsADirectoryError:
            raise MonkeyIOError('is a directory')
        except PermissionError:
            raise MonkeyIOError('permission denied')
        except (OSError, UnicodeDecodeError):
            raise MonkeyIOError('error reading file')
