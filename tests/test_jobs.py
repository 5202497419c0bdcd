import io

import pytest

from reelshell.jobs import MAXJOBS, MAXLINE, Job, JobList, JobState


def make_list(**kwargs):
    out = io.StringIO()
    return JobList(out=out, **kwargs), out


def test_job_ids_are_sequential():
    jobs, _ = make_list()
    assert jobs.add(100, JobState.BG, "a\n")
    assert jobs.add(200, JobState.BG, "b\n")
    assert [job.jid for job in jobs] == [1, 2]
    assert jobs.max_jid() == 2


def test_default_capacity_matches_constant():
    jobs, out = make_list()
    for pid in range(1, MAXJOBS + 1):
        assert jobs.add(pid, JobState.BG, "x\n")
    assert not jobs.add(MAXJOBS + 1, JobState.BG, "x\n")
    assert len(jobs) == MAXJOBS
    assert out.getvalue() == "Tried to create too many jobs\n"


@pytest.mark.parametrize("pid", [0, -5])
def test_invalid_pid_is_rejected(pid):
    jobs, _ = make_list()
    assert jobs.add(pid, JobState.FG, "x\n") is False
    assert list(jobs) == []
    assert jobs.delete(pid) is False


def test_full_list_reports_error():
    jobs, out = make_list(max_jobs=2)
    assert jobs.add(1, JobState.BG, "a\n")
    assert jobs.add(2, JobState.BG, "b\n")
    assert jobs.add(3, JobState.BG, "c\n") is False
    assert "Tried to create too many jobs" in out.getvalue()
    assert jobs.by_pid(3) is None


def test_delete_resets_next_jid_to_max_plus_one():
    jobs, _ = make_list()
    for pid in (10, 20, 30):
        jobs.add(pid, JobState.BG, "x\n")
    assert jobs.delete(30)
    jobs.add(40, JobState.BG, "y\n")
    assert jobs.pid_to_jid(40) == 3


def test_delete_middle_keeps_ids_increasing():
    jobs, _ = make_list()
    for pid in (10, 20, 30):
        jobs.add(pid, JobState.BG, "x\n")
    assert jobs.delete(20)
    jobs.add(40, JobState.BG, "y\n")
    assert jobs.pid_to_jid(40) == jobs.max_jid()
    assert jobs.pid_to_jid(40) > jobs.pid_to_jid(30)


def test_delete_unknown_pid():
    jobs, _ = make_list()
    jobs.add(10, JobState.BG, "x\n")
    assert jobs.delete(99) is False
    assert len(jobs) == 1


def test_freed_slot_is_reused_first():
    jobs, _ = make_list()
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.BG, "b\n")
    jobs.delete(10)
    jobs.add(30, JobState.BG, "c\n")
    assert [job.pid for job in jobs] == [30, 20]


def test_foreground_pid():
    jobs, _ = make_list()
    assert jobs.foreground_pid() is None
    jobs.add(10, JobState.BG, "a\n")
    jobs.add(20, JobState.FG, "b\n")
    assert jobs.foreground_pid() == 20
    jobs.by_pid(20).state = JobState.ST
    assert jobs.foreground_pid() is None


def test_lookups():
    jobs, _ = make_list()
    jobs.add(10, JobState.BG, "a\n")
    job = jobs.by_pid(10)
    assert job == Job(pid=10, jid=1, state=JobState.BG, cmdline="a\n")
    assert jobs.by_jid(job.jid) is job
    assert jobs.by_jid(0) is None
    assert jobs.by_pid(0) is None
    assert jobs.by_jid(7) is None
    assert jobs.pid_to_jid(11) is None


def test_format_jobs_states_and_order():
    jobs, _ = make_list()
    jobs.add(10, JobState.BG, "sleep 5 &\n")
    jobs.add(20, JobState.FG, "sleep 9\n")
    jobs.add(30, JobState.ST, "cat\n")
    assert jobs.format_jobs() == (
        "[1] (10) Running sleep 5 &\n"
        "[2] (20) Foreground sleep 9\n"
        "[3] (30) Stopped cat\n"
    )


def test_format_jobs_undefined_state():
    jobs, _ = make_list()
    jobs.add(10, JobState.UNDEF, "x\n")
    assert jobs.format_jobs() == "[1] (10) listjobs: Internal error: job[0].state=0 x\n"


def test_verbose_reports_added_job():
    jobs, out = make_list(verbose=True)
    jobs.add(42, JobState.BG, "ls\n")
    assert out.getvalue() == "Added job [1] 42 ls\n\n"


def test_quiet_by_default():
    jobs, out = make_list()
    jobs.add(42, JobState.BG, "ls\n")
    assert out.getvalue() == ""


def test_cmdline_truncated():
    jobs, _ = make_list()
    jobs.add(1, JobState.BG, "a" * (MAXLINE + 50))
    assert len(jobs.by_pid(1).cmdline) == MAXLINE


def test_invalid_capacity():
    with pytest.raises(ValueError):
        JobList(max_jobs=0)