# executor.py
from __future__ import annotations

import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .errors import CommandFailure
from .model import Batch, BatchOutcome, BatchPolicy, Command, CommandResult, LinkPlan
from .ui.console import Console, get_console

Spawn = Callable[..., subprocess.CompletedProcess]

# chars of captured output kept on a failure
OUTPUT_TAIL = 4000

TOOL_HINTS = {
    "yarn": "Install Yarn (npm install -g yarn) or fix PATH.",
    "npm": "Install Node.js (includes npm) or fix PATH.",
    "pnpm": "Install pnpm (npm install -g pnpm) or fix PATH.",
}


# ----------------------------------------------------------------------
# Jobs
# ----------------------------------------------------------------------

@dataclass
class Job:
    """
    A deferred link-tool invocation. Calling it runs the command.

    Non-verbose jobs capture the tool's output and attach its tail to the
    failure. Verbose jobs let the subprocess write straight to our own
    stdout/stderr while it runs.
    """
    command: Command
    verbose: bool = False
    spawn: Spawn = subprocess.run

    def __call__(self) -> CommandResult:
        cmd = self.command
        if not cmd.cwd.is_dir():
            raise CommandFailure(cmd, exit_code=1, output=f"Working directory not found: {cmd.cwd}")

        try:
            proc = self.spawn(
                cmd.argv,
                cwd=str(cmd.cwd),
                text=True,
                capture_output=not self.verbose,
            )
        except FileNotFoundError as e:
            hint = TOOL_HINTS.get(cmd.tool, f"Install {cmd.tool} or fix PATH.")
            raise CommandFailure(cmd, exit_code=127, output=str(e), hint=hint) from e
        except OSError as e:
            # e.g. the tool exists but is not executable
            raise CommandFailure(cmd, exit_code=126, output=str(e)) from e

        if proc.returncode != 0:
            output = ""
            if not self.verbose:
                output = ((proc.stdout or "") + (proc.stderr or ""))[-OUTPUT_TAIL:]
            raise CommandFailure(cmd, exit_code=proc.returncode, output=output)

        return CommandResult(command=cmd, exit_code=proc.returncode)


def build_jobs(commands: Iterable[Command], *, verbose: bool = False, spawn: Spawn = subprocess.run) -> List[Job]:
    return [Job(command=c, verbose=verbose, spawn=spawn) for c in commands]


# ----------------------------------------------------------------------
# Flow control
# ----------------------------------------------------------------------

def parallel(
    jobs: Sequence[Callable[[], CommandResult]],
    policy: BatchPolicy = BatchPolicy.STRICT,
    *,
    name: str = "",
    on_failure: Optional[Callable[[CommandFailure], None]] = None,
    max_workers: Optional[int] = None,
) -> BatchOutcome:
    """
    Start every job at once and wait for all of them to settle.

    TOLERANT: failures are collected in the outcome (and passed to
    `on_failure`), the batch still completes.
    STRICT: the first failure is re-raised. Jobs that already started are
    allowed to finish before it propagates.
    """
    outcome = BatchOutcome(batch=name)
    if not jobs:
        return outcome

    with ThreadPoolExecutor(max_workers=max_workers or len(jobs)) as pool:
        futures = [pool.submit(job) for job in jobs]

        for future in as_completed(futures):
            try:
                outcome.succeeded.append(future.result())
            except CommandFailure as failure:
                if policy is BatchPolicy.STRICT:
                    raise
                outcome.failures.append(failure)
                if on_failure is not None:
                    on_failure(failure)

    return outcome


def series(
    batches: Iterable[Batch],
    run_batch: Callable[[Batch], BatchOutcome],
    *,
    on_start: Optional[Callable[[Batch], None]] = None,
) -> Dict[str, BatchOutcome]:
    """Run batches one after another; a batch only starts once the previous one has settled."""
    outcomes: Dict[str, BatchOutcome] = {}
    for batch in batches:
        if on_start is not None:
            on_start(batch)
        outcomes[batch.name] = run_batch(batch)
    return outcomes


def run_plan(
    plan: LinkPlan,
    *,
    verbose: bool = False,
    console: Optional[Console] = None,
    spawn: Spawn = subprocess.run,
) -> Dict[str, BatchOutcome]:
    """
    Execute the three batches of a plan in order.

    Raises:
      CommandFailure from the first failing job of a strict batch.
    """
    console = console or get_console()

    def report_failure(failure: CommandFailure) -> None:
        if verbose:
            console.print_tolerated_failure(failure)

    def run_batch(batch: Batch) -> BatchOutcome:
        jobs = build_jobs(batch.commands, verbose=verbose, spawn=spawn)
        console.print_debug(f"{batch.name}: {len(jobs)} job(s), {batch.policy.value}")
        return parallel(jobs, batch.policy, name=batch.name, on_failure=report_failure)

    return series(plan.batches, run_batch, on_start=lambda b: console.print_stage(b.label))
