"""Direct audio file downloads (feed enclosures) over HTTP."""

import asyncio
import logging
from pathlib import Path

import requests

from podscrape.utils.errors import AudioDownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; podscrape/0.1)",
    "Accept": "audio/mpeg, audio/*, */*",
}


class DirectAudioDownloader:
    """Stream an audio URL to a file in the temp directory.

    Redirects are followed. There is no retry; a failed download leaves
    the caller free to try another source.
    """

    def __init__(self, output_dir: Path | None = None, timeout: float | None = 30):
        """Initialize the downloader.

        Args:
            output_dir: Directory for downloaded files (default: ./temp)
            timeout: Connect/read timeout in seconds; applies per read, so
                long files still download
        """
        self.output_dir = output_dir or Path.cwd() / "temp"
        self.timeout = timeout

    async def download(self, url: str, filename: str) -> Path:
        """Download ``url`` to ``<output_dir>/<filename>``.

        Raises:
            AudioDownloadError: On network failure or a non-200 response
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._download_sync, url, output_path)
        return output_path

    def _download_sync(self, url: str, output_path: Path) -> None:
        logger.info("Downloading audio from %s", url)
        try:
            with requests.get(
                url, stream=True, headers=HEADERS, timeout=self.timeout
            ) as response:
                if response.status_code != 200:
                    raise AudioDownloadError(
                        f"Failed to download {url}: HTTP {response.status_code}"
                    )

                downloaded = 0
                with open(output_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            downloaded += len(chunk)

        except requests.exceptions.RequestException as e:
            self._remove_partial(output_path)
            raise AudioDownloadError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            self._remove_partial(output_path)
            raise AudioDownloadError(f"Failed to write {output_path}: {e}") from e

        logger.info("Downloaded %s (%s bytes)", output_path.name, f"{downloaded:,}")

    @staticmethod
    def _remove_partial(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial download %s: %s", path, e)
