"""Command execution using the invoke library."""

from pathlib import Path

from invoke import Context, Result

from relbisect.core.log import logger


class Runner(Context):
    """invoke.Context with a single execute() entry point.

    Commands run through the shell, so a command that cannot be found
    or started comes back as an ordinary non-zero exit (127/126)
    rather than an exception.
    """

    def execute(
        self,
        command: str,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        stream: bool = False,
        log_file: Path | None = None,
        log_level: str | None = None,
        check: bool = True,
    ) -> Result:
        """Run command to completion.

        Args:
            command: Shell command line
            cwd: Working directory
            env: Variables layered over the inherited environment
            stream: Pass stdout/stderr through to the terminal while
                still capturing them
            log_file: Write combined stdout/stderr here
            log_level: Also emit every output line at this level
            check: Raise invoke.UnexpectedExit on a non-zero exit

        Returns:
            invoke.Result with stdout, stderr and exited
        """
        kwargs = {
            "hide": not stream,
            "warn": not check,
            "in_stream": False,
        }
        if env:
            kwargs["env"] = env

        logger.debug("Executing command", command=command)
        if cwd:
            with self.cd(str(cwd)):
                result = self.run(command, **kwargs)
        else:
            result = self.run(command, **kwargs)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            log_file.write_text(result.stdout + result.stderr)

        if log_level:
            for line in (result.stdout + result.stderr).splitlines():
                logger.log(log_level, line.rstrip())

        return result
