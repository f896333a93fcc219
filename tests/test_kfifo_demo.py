import io

import pytest

from mcuutils.kfifo_demo import (
    SensorData,
    example_byte_fifo,
    example_record_mode_fifo,
    example_record_mode_variable_length,
    example_reset_fifo,
    example_static_fifo,
    example_struct_fifo,
    main,
)


def test_sensor_data_round_trip():
    sample = SensorData(7, 700)
    assert SensorData.from_bytes(sample.to_bytes()) == sample


def test_sensor_data_size_matches_packed_length():
    assert len(SensorData(1, 10).to_bytes()) == SensorData.SIZE


def test_sensor_data_rejects_wrong_length():
    with pytest.raises(ValueError):
        SensorData.from_bytes(b"\x01\x02")


def test_static_fifo_reads_after_skips():
    out = io.StringIO()
    first, second = example_static_fifo(out)
    assert first == [5, 6, 7, 10]
    assert second == [5, 6, 7, 100]
    assert "FIFO is full." in out.getvalue()


def test_struct_fifo_reads_samples():
    out = io.StringIO()
    first, second = example_struct_fifo(out)
    expected = [SensorData(5, 50), SensorData(6, 60), SensorData(7, 70), SensorData(10, 100)]
    assert first == expected
    assert second == expected
    assert "mask = 7" in out.getvalue()


def test_byte_fifo_reads_packed_values():
    out = io.StringIO()
    ints, sensors = example_byte_fifo(out)
    assert ints == [5, 6, 7, 8]
    assert sensors == [SensorData(i, i * 10) for i in (5, 6, 7, 8)]
    assert "FIFO released." in out.getvalue()


def test_reset_fifo_empties():
    out = io.StringIO()
    assert example_reset_fifo(out) is True
    assert "FIFO has been emptied." in out.getvalue()


def test_record_mode_fifo():
    out = io.StringIO()
    samples = example_record_mode_fifo(out)
    assert samples == [SensorData(1, 100), SensorData(2, 200), SensorData(3, 300)]
    text = out.getvalue()
    assert "Read record: id = 2, value = 200" in text
    assert text.rstrip().endswith("FIFO is now empty.")


def test_record_mode_variable_length():
    out = io.StringIO()
    arrays = example_record_mode_variable_length(out)
    assert arrays == [[1, 2, 3], [10, 20, 30, 40, 50], [100, 200]]
    assert out.getvalue().count("Next record length:") == 3


def test_main_runs_all_examples(capsys):
    assert main([]) == 0
    captured = capsys.readouterr().out
    assert "Example 4: Record mode FIFO" in captured
    assert "Read record: 10 20 30 40 50" in captured


def test_main_rejects_unknown_argument():
    with pytest.raises(SystemExit):
        main(["--bogus"])