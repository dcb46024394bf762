# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions for fetching installer payloads.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import requests

module_logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


def fetch_text(
    url: str,
    timeout: int = DEFAULT_TIMEOUT,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Fetch a text document such as an install script.

    Args:
        url: The HTTPS URL to fetch.
        timeout: Request timeout in seconds.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The response body as text.

    Raises:
        requests.exceptions.RequestException: On any network or HTTP error.
    """
    logger_to_use = current_logger if current_logger else module_logger
    logger_to_use.info(f"Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as http_err:
        logger_to_use.error(f"HTTP error occurred while fetching {url}: {http_err}")
        raise
    except requests.exceptions.RequestException as req_err:
        logger_to_use.error(f"Could not fetch {url}: {req_err}")
        raise
    return response.text


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    timeout: int = DEFAULT_TIMEOUT,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Download a file from a given URL to a specified path.

    The body is streamed to disk in chunks; parent directories are created.
    A partially written file is removed when the download fails.

    Args:
        url: The URL of the file.
        download_to_path: The file path where the downloaded file will be saved.
        timeout: Request timeout in seconds.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The path the file was written to.

    Raises:
        requests.exceptions.RequestException: On any network or HTTP error.
        OSError: If the file cannot be written.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(download_to_path)
    logger_to_use.info(f"Downloading {url} to {download_path}")

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(download_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)
    except requests.exceptions.HTTPError as http_err:
        logger_to_use.error(f"HTTP error occurred: {http_err}")
        download_path.unlink(missing_ok=True)
        raise
    except requests.exceptions.RequestException as req_err:
        logger_to_use.error(f"Download of {url} failed: {req_err}")
        download_path.unlink(missing_ok=True)
        raise
    except IOError as io_err:
        logger_to_use.error(f"File I/O error when saving download: {io_err}")
        download_path.unlink(missing_ok=True)
        raise

    logger_to_use.info(f"Downloaded {url} to {download_path}")
    return download_path
