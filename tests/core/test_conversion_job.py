import threading

import pytest

from app.core.common.enums import ConversionErrorKind, JobKind, JobState
from app.core.jobs.data.temp_stager import TempFileStager
from app.core.jobs.domain.errors import ConversionError
from app.core.jobs.domain.models import ConversionRequest
from app.core.jobs.service.conversion_job import describe_budget


def video_request(data, quality=None, filename="holiday.mov"):
    return ConversionRequest(
        source_bytes=data,
        job_kind=JobKind.VIDEO_TRANSCODE,
        profile_selector=quality,
        source_filename=filename,
    )


class CountingStager(TempFileStager):
    """Counts releases per path."""

    def __init__(self, temp_dir):
        super().__init__(temp_dir)
        self.releases = {}

    def release(self, temp_file):
        self.releases[temp_file.path] = self.releases.get(temp_file.path, 0) + 1
        super().release(temp_file)


def test_successful_transcode(make_fake_encoder, make_manager, staging_dir, sample_video_bytes, recorded_args):
    # 1. Arrange
    encoder = make_fake_encoder("ok")
    manager = make_manager(encoder)
    job = manager.create_job(video_request(sample_video_bytes, "480p"))

    # 2. Act
    result = job.run()

    # 3. Assert - Result
    assert result.ok
    assert result.data == b"converted:" + sample_video_bytes
    assert result.content_type == "video/mp4"
    assert result.filename == "holiday.mp4"
    assert job.history == [
        JobState.CREATED, JobState.STAGED, JobState.RUNNING, JobState.COMPLETED, JobState.CLEANED,
    ]

    # 4. Assert - Encoder saw the right arguments
    args = recorded_args(encoder)
    assert args[args.index("-vf") + 1] == "scale=-2:480"
    assert args[args.index("-b:v") + 1] == "1500k"
    assert args[-1].endswith(".mp4")

    # 5. Assert - Nothing left in the temp namespace
    assert list(staging_dir.iterdir()) == []


def test_non_zero_exit_fails_with_code(make_fake_encoder, make_manager, staging_dir, sample_video_bytes):
    manager = make_manager(make_fake_encoder("fail"))
    job = manager.create_job(video_request(sample_video_bytes))

    result = job.run()

    assert not result.ok
    assert result.data is None
    assert result.error_kind == ConversionErrorKind.PROCESS_EXITED_NON_ZERO
    assert result.exit_code == 3
    assert "3" in result.message
    assert job.history[-2:] == [JobState.FAILED, JobState.CLEANED]
    # The partial output the encoder wrote is gone too
    assert list(staging_dir.iterdir()) == []


def test_timeout_kills_encoder_and_cleans_up(make_fake_encoder, make_manager, staging_dir, sample_video_bytes):
    manager = make_manager(make_fake_encoder("hang"), timeout_seconds=1.0)
    job = manager.create_job(video_request(sample_video_bytes))

    result = job.run()

    assert result.error_kind == ConversionErrorKind.PROCESS_TIMED_OUT
    assert "timed out" in result.message
    assert job.history[-2:] == [JobState.TIMED_OUT, JobState.CLEANED]
    assert list(staging_dir.iterdir()) == []


def test_missing_encoder_is_spawn_failure(make_manager, staging_dir, tmp_path, sample_video_bytes):
    manager = make_manager(tmp_path / "missing-ffmpeg")

    result = manager.convert(video_request(sample_video_bytes))

    assert result.error_kind == ConversionErrorKind.SPAWN_FAILURE
    assert list(staging_dir.iterdir()) == []


def test_success_exit_without_output_is_read_failure(make_fake_encoder, make_manager, staging_dir, sample_video_bytes):
    manager = make_manager(make_fake_encoder("no-output"))

    result = manager.convert(video_request(sample_video_bytes))

    assert result.error_kind == ConversionErrorKind.OUTPUT_READ_FAILURE
    assert list(staging_dir.iterdir()) == []


def test_empty_input_never_reaches_the_encoder(make_fake_encoder, make_manager, staging_dir):
    encoder = make_fake_encoder("ok")
    manager = make_manager(encoder)
    job = manager.create_job(video_request(b""))

    result = job.run()

    assert result.error_kind == ConversionErrorKind.NO_INPUT_PROVIDED
    assert job.history == [JobState.CREATED, JobState.FAILED, JobState.CLEANED]
    assert not encoder.with_name(encoder.name + ".args.json").exists()
    assert list(staging_dir.iterdir()) == []


@pytest.mark.parametrize("mode", ["ok", "fail", "hang"])
def test_each_temp_file_released_exactly_once(mode, make_fake_encoder, make_manager, sample_video_bytes):
    manager = make_manager(make_fake_encoder(mode), timeout_seconds=1.0)
    counting = CountingStager(manager.stager.temp_dir)
    manager.stager = counting

    manager.convert(video_request(sample_video_bytes))

    assert len(counting.releases) == 2
    assert all(count == 1 for count in counting.releases.values())


def test_exception_while_reading_output_still_cleans_up(make_fake_encoder, make_manager, staging_dir, sample_video_bytes):
    manager = make_manager(make_fake_encoder("ok"))

    def exploding_read(temp_file):
        raise MemoryError("output too big")

    manager.stager.read = exploding_read
    job = manager.create_job(video_request(sample_video_bytes))

    with pytest.raises(MemoryError):
        job.run()

    assert job.state == JobState.CLEANED
    assert list(staging_dir.iterdir()) == []


def test_job_runs_only_once(make_fake_encoder, make_manager, sample_video_bytes):
    job = make_manager(make_fake_encoder("ok")).create_job(video_request(sample_video_bytes))
    job.run()

    with pytest.raises(RuntimeError):
        job.run()


def test_concurrent_identical_jobs_do_not_collide(make_fake_encoder, make_manager, staging_dir, sample_video_bytes):
    """
    Ten jobs with the same filename and bytes run at once; each must get its own
    output back and leave nothing behind.
    """
    manager = make_manager(make_fake_encoder("ok"), max_concurrent=4)
    results = []
    lock = threading.Lock()

    def run():
        result = manager.convert(video_request(sample_video_bytes, filename="same.mp4"))
        with lock:
            results.append(result)

    threads = [threading.Thread(target=run) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 10
    assert all(r.ok and r.data == b"converted:" + sample_video_bytes for r in results)
    assert list(staging_dir.iterdir()) == []


def test_raise_for_failure(make_fake_encoder, make_manager, sample_video_bytes):
    result = make_manager(make_fake_encoder("fail")).convert(video_request(sample_video_bytes))

    with pytest.raises(ConversionError) as excinfo:
        result.raise_for_failure()

    assert excinfo.value.kind == ConversionErrorKind.PROCESS_EXITED_NON_ZERO
    assert excinfo.value.exit_code == 3


def test_describe_budget():
    assert describe_budget(300) == "5 minutes"
    assert describe_budget(60) == "1 minute"
    assert describe_budget(1.5) == "1.5 seconds"
