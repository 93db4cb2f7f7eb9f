from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import requests
from tqdm import tqdm

from ..errors import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class Downloader:
    """Fetch a URL to a local path.

    Streams into ``<dest>.part`` and renames on completion, so an interrupted
    transfer never leaves a file that looks staged. Progress goes to
    ``progress_cb(fraction)`` when given, otherwise to a tqdm bar.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
        progress_cb: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.sess = session or requests.Session()
        self.timeout = timeout
        self.progress_cb = progress_cb

    def fetch(self, url: str, dest: Path) -> Path:
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        part = dest.with_name(dest.name + ".part")

        logger.info("Downloading %s -> %s", url, dest)
        try:
            with self.sess.get(url, stream=True, timeout=self.timeout) as r:
                if not r.ok:
                    raise DownloadError(f"HTTP {r.status_code} fetching {url}")
                total = int(r.headers.get("Content-Length") or 0)
                written = self._write(r, part, total, dest.name)

            if total and written != total:
                raise DownloadError(f"Size mismatch for {url}: got {written}, expected {total}")
            part.replace(dest)
        except requests.RequestException as e:
            self._discard(part)
            raise DownloadError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            self._discard(part)
            raise DownloadError(f"Failed to write {dest}: {e}") from e
        except DownloadError:
            self._discard(part)
            raise

        logger.info("Downloaded %s (%d bytes)", dest.name, written)
        return dest

    @staticmethod
    def _discard(part: Path) -> None:
        try:
            part.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove partial download %s: %s", part, e)

    def _write(self, resp: requests.Response, part: Path, total: int, label: str) -> int:
        written = 0
        pbar = None if self.progress_cb else tqdm(total=total or None, unit="B", unit_scale=True, desc=label)
        try:
            with open(part, "wb") as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    written += len(chunk)
                    if pbar is not None:
                        pbar.update(len(chunk))
                    elif total:
                        self.progress_cb(written / total)
        finally:
            if pbar is not None:
                pbar.close()
        if self.progress_cb:
            self.progress_cb(1.0)
        return written
