import pytest

from ad_studio.core.domain.entities import GeneratedVideo
from ad_studio.core.domain.session import (
    LOADING_MESSAGES, MISSING_IMAGE_MESSAGE, MISSING_SCRIPT_MESSAGE, StudioSession
)


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeTask:
    def __init__(self):
        self.cancelled = False

    def done(self):
        return False

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return StudioSession(session_id="s1", clock=clock)


def test_new_session_is_idle(session):
    assert session.state == "idle"
    assert session.video_state is None


def test_script_requires_image(session):
    assert session.begin_script("anything") is False
    assert session.error == MISSING_IMAGE_MESSAGE
    assert session.is_loading is False


def test_script_success_path(session, product_image, ad_script):
    session.select_image(product_image)

    assert session.begin_script("wireless headphones") is True
    assert session.state == "script_loading"

    session.script_succeeded(ad_script)
    assert session.state == "script_ready"
    assert session.is_loading is False
    assert len(session.ad_script.scenes) == 3


def test_script_error_then_soft_reset_keeps_image(session, product_image):
    session.select_image(product_image)
    session.begin_script("wireless headphones")
    session.script_failed("API rate limit exceeded. Please try again later.")
    assert session.state == "script_error"

    session.reset()

    assert session.state == "idle"
    assert session.error is None
    assert session.description == ""
    assert session.image is product_image


def test_script_error_then_hard_reset_discards_image(session, product_image):
    session.select_image(product_image)
    session.begin_script()
    session.script_failed("boom")

    session.hard_reset()

    assert session.state == "idle"
    assert session.error is None
    assert session.image is None


def test_selecting_image_clears_previous_script(session, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)

    session.select_image(product_image)

    assert session.ad_script is None
    assert session.state == "idle"


def test_video_requires_script(session, product_image):
    session.select_image(product_image)

    assert session.begin_video() is False
    assert session.video_error == MISSING_SCRIPT_MESSAGE


def test_video_success_and_failure(session, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)

    assert session.begin_video() is True
    assert session.video_state == "video_loading"
    session.video_failed("API quota exceeded.")
    assert session.video_state == "video_error"
    assert session.state == "script_ready"

    assert session.begin_video() is True
    assert session.video_error is None
    session.video_succeeded(GeneratedVideo(uri="https://x?key=k", filename="ad-video-x.mp4"))
    assert session.video_state == "video_ready"


def test_only_one_video_in_flight(session, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)

    assert session.begin_video() is True
    assert session.begin_video() is False
    assert session.video_error is None


def test_loading_message_rotates_every_interval(session, clock, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)
    session.begin_video()

    assert session.loading_message() == LOADING_MESSAGES[0]
    clock.now += 4.5
    assert session.loading_message() == LOADING_MESSAGES[0]
    clock.now += 0.5
    assert session.loading_message() == LOADING_MESSAGES[1]
    clock.now += 5 * (len(LOADING_MESSAGES) - 1)
    assert session.loading_message() == LOADING_MESSAGES[0]


def test_loading_message_restarts_for_each_video(session, clock, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)
    session.begin_video()
    clock.now += 12
    session.video_failed("boom")

    assert session.loading_message() is None
    session.begin_video()
    assert session.loading_message() == LOADING_MESSAGES[0]


def test_reset_cancels_running_video(session, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)
    session.begin_video()
    task = FakeTask()
    session.video_task = task

    session.reset()

    assert task.cancelled is True
    assert session.video_task is None
    assert session.is_video_loading is False
    assert session.image is product_image


def test_new_script_cancels_running_video(session, product_image, ad_script):
    session.select_image(product_image)
    session.begin_script()
    session.script_succeeded(ad_script)
    session.begin_video()
    task = FakeTask()
    session.video_task = task

    session.begin_script("something else")

    assert task.cancelled is True
    assert session.is_video_loading is False
    assert session.video is None
    assert session.loading_message() is None
