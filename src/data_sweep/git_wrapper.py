import logging
import subprocess

from .constants import APP_NAME, VCS_BINARY

logger = logging.getLogger(APP_NAME)


class GitClient:
    """A thin wrapper around the version-control command-line client.

    Commands run against an explicit directory via `-C`, so the process
    working directory never changes.

    Attributes:
        binary (str): The executable to invoke (e.g. 'git').
    """

    def __init__(self, binary: str = VCS_BINARY):
        self.binary = binary

    def _run(self, args: list[str]) -> int | None:
        """Executes the client with its output discarded unread.

        Args:
            args (list[str]): Arguments passed after the binary name.

        Returns:
            int | None: The exit status, or None if the binary could not be launched.
        """
        try:
            res = subprocess.run(
                [self.binary, *args],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
            return res.returncode
        except OSError as e:
            logger.debug(f"Could not launch {self.binary}: {e}")
            return None

    def pull(self, directory: str) -> int | None:
        """Runs `<binary> -C <directory> pull`.

        Failures are not raised. The caller decides whether to look at the
        returned status.

        Args:
            directory (str): The working tree to update.

        Returns:
            int | None: The exit status, or None if the binary could not be launched.
        """
        return self._run(["-C", directory, "pull"])
