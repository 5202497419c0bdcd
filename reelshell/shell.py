"""A small interactive shell with foreground and background job control."""

from __future__ import annotations

import getopt
import os
import re
import signal
import subprocess
import sys
import time
from typing import Optional, TextIO

from reelshell.cmdline import parse_line, usage_text
from reelshell.jobs import JobList, JobState

PROMPT = "tsh> "

_DIGITS = re.compile(r"\s*[+-]?\d+")
_BLOCKED = {signal.SIGCHLD, signal.SIGTSTP, signal.SIGINT}
_WAIT_FLAGS = os.WNOHANG | os.WUNTRACED


def _atoi(text: str) -> int:
    match = _DIGITS.match(text)
    return int(match.group()) if match else 0


def _child_setup() -> None:
    """Give the child its own process group and let it receive job-control signals."""
    os.setpgid(0, 0)
    signal.pthread_sigmask(signal.SIG_UNBLOCK, _BLOCKED)


class Shell:
    """Reads command lines, runs built-ins and launches programs as tracked jobs."""

    poll_interval = 0.05

    def __init__(
        self,
        emit_prompt: bool = True,
        verbose: bool = False,
        out: Optional[TextIO] = None,
    ) -> None:
        self.emit_prompt = emit_prompt
        self.verbose = verbose
        self._out = out
        self.jobs = JobList(verbose=verbose, out=out)
        self._processes: dict[int, subprocess.Popen] = {}

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def eval(self, cmdline: str) -> None:
        """Run one command line: a built-in at once, anything else as a new job."""
        try:
            parsed = parse_line(cmdline)
        except ValueError as exc:
            self.out.write(f"{exc}\n")
            return
        if parsed.is_blank:
            return
        if self.builtin_cmd(parsed.argv):
            return

        self.out.flush()
        old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, _BLOCKED)
        try:
            try:
                process = subprocess.Popen(parsed.argv, preexec_fn=_child_setup)
            except OSError:
                self.out.write(f"{parsed.argv[0]}: Command not found\n")
                return
            pid = process.pid
            self._processes[pid] = process
            state = JobState.BG if parsed.background else JobState.FG
            self.jobs.add(pid, state, cmdline)
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)

        if parsed.background:
            job = self.jobs.by_pid(pid)
            if job is not None:
                self.out.write(f"[{job.jid}] ({job.pid}) {job.cmdline}")
        else:
            self.wait_fg(pid)

    def builtin_cmd(self, argv: list[str]) -> bool:
        """Run quit, jobs, bg or fg; return False if argv is not a built-in."""
        command = argv[0]
        if command == "quit":
            raise SystemExit(0)
        if command == "jobs":
            self.out.write(self.jobs.format_jobs())
            return True
        if command in ("bg", "fg"):
            self.do_bgfg(argv)
            return True
        return False

    def do_bgfg(self, argv: list[str]) -> None:
        """Resume a job given by PID or %jobid, in the background or the foreground."""
        command = argv[0]
        if len(argv) < 2:
            self.out.write(f"{command} command requires PID or %jobid argument\n")
            return
        target = argv[1]
        if target[:1].isdigit():
            pid = _atoi(target)
            job = self.jobs.by_pid(pid)
            if job is None:
                self.out.write(f"({pid}): No such process\n")
                return
        elif target.startswith("%"):
            job = self.jobs.by_jid(_atoi(target[1:]))
            if job is None:
                self.out.write(f"{target}: No such job\n")
                return
        else:
            self.out.write(f"{command}: argument must be a PID or %jobid\n")
            return

        if command == "bg":
            job.state = JobState.BG
            try:
                os.kill(job.pid, signal.SIGCONT)
            except ProcessLookupError:
                pass
            self.out.write(f"[{job.jid}] ({job.pid}) {job.cmdline}")
        else:
            job.state = JobState.FG
            try:
                os.killpg(job.pid, signal.SIGCONT)
            except ProcessLookupError:
                pass
            self.wait_fg(job.pid)

    def _is_foreground(self, pid: int) -> bool:
        job = self.jobs.by_pid(pid)
        return job is not None and job.state == JobState.FG

    def wait_fg(self, pid: int) -> None:
        """Block until the job with this pid is no longer in the foreground."""
        while self._is_foreground(pid):
            self.reap_children()
            if self._is_foreground(pid):
                time.sleep(self.poll_interval)

    def reap_children(self) -> int:
        """Collect every child that exited, died or stopped; return how many changed."""
        old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, _BLOCKED)
        try:
            changed = 0
            for pid in list(self._processes):
                try:
                    waited, status = os.waitpid(pid, _WAIT_FLAGS)
                except ChildProcessError:
                    self._processes.pop(pid, None)
                    self.jobs.delete(pid)
                    changed += 1
                    continue
                if waited == 0:
                    continue
                changed += 1
                if os.WIFSTOPPED(status):
                    job = self.jobs.by_pid(pid)
                    if job is not None:
                        job.state = JobState.ST
                        self.out.write(
                            f"Job [{job.jid}] ({pid}) stopped by signal {os.WSTOPSIG(status)}\n"
                        )
                    continue
                process = self._processes.pop(pid)
                process.returncode = os.waitstatus_to_exitcode(status)
                if os.WIFSIGNALED(status):
                    job = self.jobs.by_pid(pid)
                    if job is not None:
                        self.out.write(
                            f"Job [{job.jid}] ({pid}) terminated by signal {os.WTERMSIG(status)}\n"
                        )
                self.jobs.delete(pid)
            return changed
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)

    def forward_signal(self, signum: int) -> bool:
        """Send a signal to the foreground job's process group; return whether one was sent."""
        pid = self.jobs.foreground_pid()
        if pid is None:
            return False
        try:
            os.killpg(pid, signum)
        except ProcessLookupError:
            return False
        return True

    def _on_sigquit(self, signum, frame) -> None:
        self.out.write("Terminating after receipt of SIGQUIT signal\n")
        self.out.flush()
        raise SystemExit(1)

    def install_signal_handlers(self) -> None:
        """Route ctrl-c and ctrl-z to the foreground job and reap children as they change."""
        signal.signal(signal.SIGINT, lambda signum, frame: self.forward_signal(signum))
        signal.signal(signal.SIGTSTP, lambda signum, frame: self.forward_signal(signum))
        signal.signal(signal.SIGCHLD, lambda signum, frame: self.reap_children())
        signal.signal(signal.SIGQUIT, self._on_sigquit)

    def run(self, stream: TextIO) -> int:
        """Read and evaluate lines until end of input or quit; return the exit status."""
        try:
            while True:
                if self.emit_prompt:
                    self.out.write(PROMPT)
                    self.out.flush()
                line = stream.readline()
                if not line.endswith("\n"):
                    self.out.flush()
                    return 0
                self.eval(line)
                self.out.flush()
        except SystemExit as exc:
            self.out.flush()
            if exc.code is None:
                return 0
            return exc.code if isinstance(exc.code, int) else 1


def main(argv=None) -> int:
    """Start the shell on standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options, _ = getopt.getopt(args, "hvp")
    except getopt.GetoptError:
        sys.stdout.write(usage_text())
        return 1

    verbose = False
    emit_prompt = True
    for option, _ in options:
        if option == "-h":
            sys.stdout.write(usage_text())
            return 1
        if option == "-v":
            verbose = True
        elif option == "-p":
            emit_prompt = False

    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.dup2(1, 2)
    except OSError:
        pass

    shell = Shell(emit_prompt=emit_prompt, verbose=verbose)
    shell.install_signal_handlers()
    return shell.run(sys.stdin)