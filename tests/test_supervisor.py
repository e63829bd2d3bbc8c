from supervisor import supervise


def runner(*outcomes):
    calls = []
    outcomes = list(outcomes)

    def run(command):
        calls.append(command)
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome
    return run, calls


def test_clean_exit_stops_supervision():
    run, calls = runner(0)
    sleeps = []
    assert supervise(['server'], delay=5, run=run, sleep=sleeps.append) == 0
    assert calls == [['server']]
    assert sleeps == []


def test_crashes_are_restarted_after_the_delay():
    run, calls = runner(1, -9, 0)
    sleeps = []
    assert supervise(['server'], delay=5, run=run, sleep=sleeps.append) == 2
    assert len(calls) == 3
    assert sleeps == [5, 5]


def test_start_failures_are_retried():
    run, calls = runner(OSError('no such file'), 0)
    sleeps = []
    assert supervise(['server'], delay=2, run=run, sleep=sleeps.append) == 1
    assert sleeps == [2]


def test_gives_up_after_max_restarts():
    run, calls = runner(1, 1, 1)
    sleeps = []
    assert supervise(['server'], delay=1, run=run, sleep=sleeps.append, max_restarts=2) == 2
    assert len(calls) == 3
