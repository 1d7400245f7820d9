"""External collaborators injected into the workflow graph."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from semver import Version

from relbisect.core.config import Config


@dataclass
class BisectDeps:
    """Collaborators used by the workflow nodes.

    Attributes:
        list_tags: Returns the raw release tag stream
        oracle: Release → is bad; None when only listing the range
    """

    list_tags: Callable[[], Iterable[str]]
    oracle: Callable[[Version], bool] | None = None


@contextmanager
def open_deps(config: Config, command: str | None) -> Iterator[BisectDeps]:
    """Build the real GitHub/installer/shell collaborators.

    The HTTP clients are closed on exit.
    """
    import httpx

    from relbisect.release.lister import ReleaseLister, create_client
    from relbisect.release.provision import Provisioner
    from relbisect.runner.check import CheckRunner
    from relbisect.runner.oracle import ReleaseOracle

    releases = config.releases
    with create_client(
        releases.api_url, releases.token, releases.timeout
    ) as api, httpx.Client(timeout=releases.timeout) as downloads:
        lister = ReleaseLister(
            api,
            releases.owner,
            releases.repo,
            per_page=releases.per_page,
            backoff=releases.rate_limit_backoff,
        )

        oracle = None
        if command is not None:
            cache = config.cache
            provisioner = Provisioner(
                cache.root,
                downloads,
                installer_url=cache.installer_url,
                installer_name=cache.installer_name,
                install_args=cache.install_args,
                bin_subdir=cache.bin_subdir,
            )
            oracle = ReleaseOracle(
                provisioner, CheckRunner(command, config.check.output_dir)
            )

        yield BisectDeps(list_tags=lister.iter_tags, oracle=oracle)
