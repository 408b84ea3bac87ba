import base64
import time

from phrasebuzz.services.game.photos import DirectoryPhotoStore
from phrasebuzz.services.game.scheduler import ReenableScheduler


class InlineSocketIO:
    def __init__(self):
        self.sleeps = []

    def start_background_task(self, target, *args):
        target(*args)

    def sleep(self, seconds):
        self.sleeps.append(seconds)


def test_svg_photo_is_stored_with_plain_extension(tmp_path):
    store = DirectoryPhotoStore(str(tmp_path))
    data_url = 'data:image/svg+xml;base64,' + base64.b64encode(b'<svg/>').decode()
    url = store.store(data_url)
    assert url.startswith('/api/game/photos/winner-photo-')
    assert url.endswith('.svg')
    name = url.rsplit('/', 1)[-1]
    assert (tmp_path / name).read_bytes() == b'<svg/>'


def test_dotted_subtype_keeps_last_part(tmp_path):
    store = DirectoryPhotoStore(str(tmp_path))
    data_url = 'data:image/vnd.microsoft.icon;base64,' + base64.b64encode(b'ico').decode()
    assert store.store(data_url).endswith('.icon')


def test_past_deadline_fires_after_margin_only(flask_app):
    flask_app.config['ENABLE_SCHEDULER_IN_TESTS'] = True
    sio = InlineSocketIO()
    scheduler = ReenableScheduler(flask_app, sio)

    scheduler.schedule(int(time.time() * 1000) - 10_000)
    assert sio.sleeps == [0.05]


def test_scheduler_disabled_in_tests_by_default(flask_app):
    sio = InlineSocketIO()
    ReenableScheduler(flask_app, sio).schedule(int(time.time() * 1000))
    assert sio.sleeps == []
