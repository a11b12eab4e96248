import warnings

import pytest
import torch

from mgsviz.driver import default_vectors, run, main, build_parser, STEP_DELAY, CYCLE_DELAY
from mgsviz.orthonormalize import is_orthonormal
from mgsviz.transport import UDPSource, encode_frame


class RecordingSink:
    def __init__(self):
        self.frames = []

    def send(self, snapshot):
        self.frames.append(snapshot)
        return 0


class FailingSink:
    def send(self, snapshot):
        raise OSError("network unreachable")


def test_default_vectors_are_fresh_copies():
    a = default_vectors()
    b = default_vectors()
    assert a.dtype == torch.float32
    assert a.shape == (3, 3)
    a.zero_()
    assert torch.equal(b, torch.tensor([[2.0, 1.0, 0.0], [1.0, 2.0, 0.0], [1.0, 1.0, 1.5]]))


def test_run_sends_every_snapshot_with_pacing():
    sink = RecordingSink()
    sleeps = []
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        n_sent = run(sink, cycles=2, sleep=sleeps.append)

    assert n_sent == 14
    assert len(sink.frames) == 14
    assert sleeps == ([STEP_DELAY] * 7 + [CYCLE_DELAY]) * 2

    # Each cycle restarts from the original input and ends orthonormal
    torch.testing.assert_close(sink.frames[0], default_vectors())
    torch.testing.assert_close(sink.frames[7], default_vectors())
    assert is_orthonormal(sink.frames[6])
    assert is_orthonormal(sink.frames[13])


def test_run_zero_cycles_sends_nothing():
    sink = RecordingSink()
    assert run(sink, cycles=0, sleep=lambda s: None) == 0
    assert sink.frames == []


def test_run_custom_delays_and_vectors():
    sink = RecordingSink()
    sleeps = []
    n_sent = run(
        sink,
        cycles=1,
        step_delay=0.1,
        cycle_delay=1.0,
        vectors_fn=lambda: torch.tensor([[0.0, 3.0, 4.0]]),
        sleep=sleeps.append,
    )
    assert n_sent == 2
    assert sleeps == [0.1, 0.1, 1.0]
    torch.testing.assert_close(sink.frames[-1], torch.tensor([[0.0, 0.6, 0.8]]))


def test_run_warns_on_degenerate_input():
    sink = RecordingSink()
    with pytest.warns(RuntimeWarning, match="not orthonormal"):
        run(
            sink,
            cycles=1,
            vectors_fn=lambda: torch.tensor([[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]]),
            sleep=lambda s: None,
        )
    assert len(sink.frames) == 4


def test_run_propagates_send_errors():
    with pytest.raises(OSError, match="network unreachable"):
        run(FailingSink(), cycles=1, sleep=lambda s: None)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.host == "gateway"
    assert args.port == 8000
    assert args.startup_delay == 3.0
    assert args.step_delay == 0.5
    assert args.cycle_delay == 3.0
    assert args.cycles is None
    assert args.verbose is False


def test_main_streams_to_receiver(capsys):
    sleeps = []
    with UDPSource("127.0.0.1", 0, timeout=5.0) as source:
        host, port = source.address
        status = main(
            ["--host", host, "--port", str(port), "--cycles", "1", "--verbose"],
            sleep=sleeps.append,
        )
        frames = [source.receive() for _ in range(7)]

    assert status == 0
    assert sleeps[0] == 3.0
    assert len(sleeps) == 1 + 7 + 1
    torch.testing.assert_close(frames[0], default_vectors())
    assert is_orthonormal(frames[-1])

    out = capsys.readouterr().out
    assert "Cycle 0 step 7/7 sent" in out
    assert "Sent 7 snapshots" in out


class EncodingSink(RecordingSink):
    def send(self, snapshot):
        payload = encode_frame(snapshot)
        self.frames.append(payload)
        return len(payload)


def test_run_propagates_unencodable_frames():
    with pytest.warns(RuntimeWarning):
        with pytest.raises(ValueError):
            run(
                EncodingSink(),
                cycles=1,
                vectors_fn=lambda: torch.tensor([[float("nan"), 0.0, 0.0]]),
                sleep=lambda s: None,
            )


def test_public_entry_points_are_documented():
    for fn in (build_parser, main, run, default_vectors):
        assert fn.__doc__ and fn.__doc__.strip()
