"""Job table for a shell with job control."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, TextIO

MAXLINE = 1024
MAXARGS = 128
MAXJOBS = 16
MAXJID = 1 << 16


class JobState(IntEnum):
    """Lifecycle states of a job."""

    UNDEF = 0
    FG = 1
    BG = 2
    ST = 3


_STATE_LABELS = {
    JobState.BG: "Running ",
    JobState.FG: "Foreground ",
    JobState.ST: "Stopped ",
}


@dataclass
class Job:
    """A process the shell is tracking."""

    pid: int
    jid: int
    state: JobState
    cmdline: str


class JobList:
    """Fixed number of job slots, with job ids handed out in sequence."""

    def __init__(
        self,
        max_jobs: int = MAXJOBS,
        verbose: bool = False,
        out: Optional[TextIO] = None,
    ) -> None:
        if max_jobs < 1:
            raise ValueError(f"max_jobs must be positive, got {max_jobs}")
        self.max_jobs = max_jobs
        self.verbose = verbose
        self._out = out
        self._slots: list[Optional[Job]] = [None] * max_jobs
        self._next_jid = 1

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def add(self, pid: int, state: JobState, cmdline: str) -> bool:
        """Track a new job; return False if the pid is invalid or every slot is taken."""
        if pid < 1:
            return False
        for index, slot in enumerate(self._slots):
            if slot is not None:
                continue
            job = Job(pid=pid, jid=self._next_jid, state=JobState(state), cmdline=cmdline[:MAXLINE])
            self._slots[index] = job
            self._next_jid += 1
            if self._next_jid > self.max_jobs:
                self._next_jid = 1
            if self.verbose:
                self.out.write(f"Added job [{job.jid}] {job.pid} {job.cmdline}\n")
            return True
        self.out.write("Tried to create too many jobs\n")
        return False

    def delete(self, pid: int) -> bool:
        """Stop tracking the job with this pid; return whether one was removed."""
        if pid < 1:
            return False
        for index, slot in enumerate(self._slots):
            if slot is not None and slot.pid == pid:
                self._slots[index] = None
                self._next_jid = self.max_jid() + 1
                return True
        return False

    def max_jid(self) -> int:
        """Largest job id in use, or 0 when there are no jobs."""
        return max((job.jid for job in self), default=0)

    def foreground_pid(self) -> Optional[int]:
        """Pid of the foreground job, or None."""
        return next((job.pid for job in self if job.state == JobState.FG), None)

    def by_pid(self, pid: int) -> Optional[Job]:
        """The job with this pid, or None."""
        if pid < 1:
            return None
        return next((job for job in self if job.pid == pid), None)

    def by_jid(self, jid: int) -> Optional[Job]:
        """The job with this job id, or None."""
        if jid < 1:
            return None
        return next((job for job in self if job.jid == jid), None)

    def pid_to_jid(self, pid: int) -> Optional[int]:
        """Job id of the job with this pid, or None."""
        job = self.by_pid(pid)
        return job.jid if job is not None else None

    def format_jobs(self) -> str:
        """Render the job list in slot order."""
        parts = []
        for index, slot in enumerate(self._slots):
            if slot is None:
                continue
            label = _STATE_LABELS.get(
                slot.state,
                f"listjobs: Internal error: job[{index}].state={int(slot.state)} ",
            )
            parts.append(f"[{slot.jid}] ({slot.pid}) {label}{slot.cmdline}")
        return "".join(parts)

    def __iter__(self) -> Iterator[Job]:
        return (slot for slot in self._slots if slot is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)