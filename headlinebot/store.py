import logging
import os

logger = logging.getLogger(__name__)

POSTED_TITLES = 'posted_titles'
RECENT_KEYWORDS = 'recent_keywords'


def bounded(items, capacity):
    """The newest ``capacity`` entries of ``items``."""
    if capacity <= 0:
        return []
    return list(items)[-capacity:]


def _read_bytes(filename):
    if not os.path.isfile(filename):
        return None
    with open(filename, 'rb') as f:
        return f.read()


class ListStore:
    """Line-delimited string lists kept as ``<directory>/<key>.txt``."""

    def __init__(self, directory):
        self.directory = directory

    def path(self, key):
        return os.path.join(self.directory, f"{key}.txt")

    def load(self, key):
        filename = self.path(key)
        if not os.path.exists(filename):
            return []
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return [line.strip() for line in f if line.strip()]
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {filename}, starting empty: {e}")
            return []

    def save(self, key, items):
        self.save_all({key: items})

    def save_all(self, lists):
        """Write several lists so that either all of them change or none do.

        Every list is staged to a ``.tmp`` file first; the files are swapped
        in with ``os.replace`` only once all writes succeeded, and swaps
        already made are undone if a later one fails.
        """
        os.makedirs(self.directory, exist_ok=True)
        staged = []
        try:
            for key, items in lists.items():
                target = self.path(key)
                tmp = f"{target}.tmp"
                staged.append((tmp, target))
                with open(tmp, 'w', encoding='utf-8') as f:
                    f.writelines(f"{item}\n" for item in items)
            originals = [(target, _read_bytes(target)) for _, target in staged]
        except Exception:
            self._discard(staged)
            raise

        replaced = []
        try:
            for tmp, target in staged:
                os.replace(tmp, target)
                replaced.append(target)
        except Exception:
            self._discard(staged)
            self._restore([(t, data) for t, data in originals if t in replaced])
            raise
        for key, items in lists.items():
            logger.info(f"Saved {len(items)} entries to {self.path(key)}")

    def _discard(self, staged):
        for tmp, _ in staged:
            if os.path.isfile(tmp):
                os.remove(tmp)

    def _restore(self, originals):
        for target, data in originals:
            if data is None:
                os.remove(target)
                continue
            tmp = f"{target}.tmp"
            with open(tmp, 'wb') as f:
                f.write(data)
            os.replace(tmp, target)
            logger.warning(f"Restored {target} after a failed save")
