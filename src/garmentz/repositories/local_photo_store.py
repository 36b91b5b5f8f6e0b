# Rev 0.2.0
# src/garmentz/repositories/local_photo_store.py
from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import Iterable, List

from garmentz.errors import RemoteError

log = logging.getLogger(__name__)


class LocalPhotoStore:
    """
    Copies picked images under <root>/<user_id>/ and hands back file:// URLs.
    Orders only keep the URLs, so any blob host can replace this class.
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    def upload(self, user_id: str, paths: Iterable[str | Path]) -> List[str]:
        target = self._root / user_id
        urls: List[str] = []
        try:
            target.mkdir(parents=True, exist_ok=True)
            for p in paths:
                src = Path(p)
                dst = target / f"{uuid.uuid4().hex}{src.suffix.lower()}"
                shutil.copyfile(src, dst)
                urls.append(dst.resolve().as_uri())
        except OSError as e:
            raise RemoteError("upload photos", str(e)) from e
        log.info("Stored %d photo(s) for %s", len(urls), user_id)
        return urls
