"""The bad-release oracle: provision a release, then run the check."""

from __future__ import annotations

from semver import Version

from relbisect.core.log import logger
from relbisect.core.result import CheckResult
from relbisect.release.provision import Provisioner
from relbisect.runner.check import CheckRunner


class ReleaseOracle:
    """Callable deciding whether a release is bad.

    Verdicts are memoized per version, so a repeated question (for
    instance from a verification pass) neither reinstalls nor reruns
    anything. Provisioning errors propagate.
    """

    def __init__(self, provisioner: Provisioner, checker: CheckRunner):
        self.provisioner = provisioner
        self.checker = checker
        self.results: list[CheckResult] = []
        self._verdicts: dict[Version, bool] = {}

    def __call__(self, version: Version) -> bool:
        if version in self._verdicts:
            return self._verdicts[version]

        bin_dir = self.provisioner.ensure(version)
        logger.info(f"Running {self.checker.command} with {bin_dir}")
        result = self.checker.run(version, bin_dir)
        self.results.append(result)

        verdict = "bad" if result.bad else "good"
        logger.info(
            f"Release {version} is {verdict}",
            returncode=result.returncode,
        )
        self._verdicts[version] = result.bad
        return result.bad
