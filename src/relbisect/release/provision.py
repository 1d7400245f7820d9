"""Install release runtimes into a local cache directory."""

from __future__ import annotations

import shlex
from pathlib import Path

import httpx
from invoke.exceptions import UnexpectedExit
from semver import Version

from relbisect.core.log import logger
from relbisect.core.runner import Runner

INSTALLED_MARKER = ".installed"


class ProvisioningError(RuntimeError):
    """A release runtime could not be installed."""


class Provisioner:
    """Ensures an installed runtime exists for a release.

    Layout under the cache root:

        installer/<installer_name>          downloaded once
        releases/<version>/                 HOME for the installer
        releases/<version>/<bin_subdir>/    returned to callers
        releases/<version>/.installed       written after success

    An entry counts as present only once its marker exists, so an
    interrupted install is redone on the next run. There is no
    locking; concurrent runs must not share a cache root.
    """

    def __init__(
        self,
        cache_root: Path,
        client: httpx.Client,
        installer_url: str,
        installer_name: str = "install-pulumi.sh",
        install_args: str = "--version {version}",
        bin_subdir: str = ".pulumi/bin",
        runner: Runner | None = None,
    ):
        self.cache_root = Path(cache_root)
        self.client = client
        self.installer_url = installer_url
        self.installer_name = installer_name
        self.install_args = install_args
        self.bin_subdir = bin_subdir
        self.runner = runner or Runner()

    @property
    def installer_path(self) -> Path:
        return self.cache_root / "installer" / self.installer_name

    def home_for(self, version: Version) -> Path:
        return self.cache_root / "releases" / str(version)

    def bin_dir_for(self, version: Version) -> Path:
        return self.home_for(version) / self.bin_subdir

    def is_installed(self, version: Version) -> bool:
        return (self.home_for(version) / INSTALLED_MARKER).is_file()

    def ensure_installer(self) -> Path:
        """Download the installer script unless already cached."""
        path = self.installer_path
        if path.is_file():
            return path

        logger.info(f"Downloading installer from {self.installer_url}")
        try:
            response = self.client.get(
                self.installer_url, follow_redirects=True
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProvisioningError(
                f"Failed to download installer {self.installer_url}: {e}"
            ) from e

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
        path.chmod(0o755)
        return path

    def ensure(self, version: Version) -> Path:
        """Return the bin directory of version's runtime, installing it
        first if needed.

        Raises:
            ProvisioningError: If the installer fails
        """
        bin_dir = self.bin_dir_for(version)
        if self.is_installed(version):
            logger.debug(f"Using cached {version}", path=str(bin_dir))
            return bin_dir

        installer = self.ensure_installer()
        home = self.home_for(version)
        home.mkdir(parents=True, exist_ok=True)

        args = self.install_args.format(version=version)
        command = f"{shlex.quote(str(installer))} {args}"
        logger.info(f"Installing {version}")
        try:
            self.runner.execute(
                command, env={"HOME": str(home)}, log_level="debug"
            )
        except UnexpectedExit as e:
            raise ProvisioningError(
                f"Installer failed for {version} "
                f"(exit {e.result.exited}): {e.result.stderr.strip()}"
            ) from e

        if not bin_dir.is_dir():
            raise ProvisioningError(
                f"Installer for {version} did not create {bin_dir}"
            )
        (home / INSTALLED_MARKER).touch()
        return bin_dir
