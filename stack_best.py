
"""Single best-score value kept in a small JSON file"""
import json
import logging
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)


class BestScore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.best = 0

    def load(self) -> int:
        """Read the stored best; a missing or unreadable file counts as 0."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self.best = 0
            return self.best
        except (OSError, ValueError) as e:
            log.warning("ignoring best score file %s: %s", self.path, e)
            self.best = 0
            return self.best
        best = data.get("best", 0) if isinstance(data, dict) else 0
        self.best = best if isinstance(best, int) and best >= 0 else 0
        return self.best

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"best": self.best}), encoding="utf-8")

    def record(self, score: int) -> bool:
        """Store ``score`` if it beats the current best. Returns True when saved."""
        if score <= self.best:
            return False
        self.best = score
        self.save()
        log.info("new best score %d", score)
        return True
