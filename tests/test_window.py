import pytest

from mysteryengine.activity import Activity
from mysteryengine.window import Event, EventType, Window, WindowStatus


class Recorder(Activity):
    def __init__(self, accept=True, consume=False):
        self.accept = accept
        self.consume = consume
        self.calls = []
        self.events = []
        self.dts = []
        self.window = None

    def prepare(self, window):
        self.window = window
        self.calls.append("prepare")
        return self.accept

    def start(self):
        self.calls.append("start")

    def stop(self):
        self.calls.append("stop")

    def handle_event(self, event):
        self.events.append(event)
        return self.consume

    def update(self, dt):
        self.dts.append(dt)

    def on_enter_sysloop(self):
        self.calls.append("enter")

    def on_exit_sysloop(self):
        self.calls.append("exit")


class ResizingWindow(Window):
    def __init__(self):
        super().__init__()
        self.real_size = (0, 0)

    def _realtime_size(self):
        return self.real_size


class FullscreenWindow(Window):
    def __init__(self):
        super().__init__()
        self._window_status = WindowStatus.FULLSCREEN


def make_window(activity):
    win = Window()
    win.create(True)
    win.change_activity(activity)
    win.handle_event()
    return win


def test_new_window_state():
    win = Window()
    assert not win.is_open()
    assert not win.available()
    assert win.window_status is WindowStatus.WINDOWED
    assert win.waiting_for_stop is False
    assert win.sizing_as_resized is False


def test_create_and_available():
    win = Window()
    assert win.create(True) is True
    assert win.is_open()
    assert not win.available()
    win.change_activity(Recorder())
    assert win.available()


def test_change_activity_none_raises():
    win = Window()
    with pytest.raises(ValueError):
        win.change_activity(None)


def test_activity_switch_stops_old_and_starts_new():
    first = Recorder()
    win = make_window(first)
    assert win.activity is first
    second = Recorder()
    win.change_activity(second)
    win.handle_event()
    assert first.calls == ["prepare", "start", "stop"]
    assert second.calls == ["prepare", "start"]
    assert second.window is win
    assert win.activity is second


def test_rejected_activity_keeps_old():
    first = Recorder()
    win = make_window(first)
    refused = Recorder(accept=False)
    win.change_activity(refused)
    win.handle_event()
    assert win.activity is first
    assert refused.calls == ["prepare"]
    assert first.calls == ["prepare", "start"]


def test_resized_event_updates_view():
    act = Recorder()
    win = make_window(act)
    ev = Event(EventType.RESIZED, 640, 480)
    win.post_event(ev)
    win.handle_event()
    assert win.view == (0.0, 0.0, 640.0, 480.0)
    assert act.events == [ev]


def test_consuming_event_drains_queue():
    act = Recorder(consume=True)
    win = make_window(act)
    a = Event(EventType.KEY_PRESSED)
    b = Event(EventType.KEY_RELEASED)
    win.post_event(a)
    win.post_event(b)
    win.handle_event()
    assert act.events == [a]
    assert win.poll_event() is None


def test_poll_event_order():
    win = Window()
    win.create(True)
    a = Event(EventType.GAINED_FOCUS)
    b = Event(EventType.LOST_FOCUS)
    win.post_event(a)
    win.post_event(b)
    assert win.poll_event() is a
    assert win.poll_event() is b
    assert win.poll_event() is None


def test_event_without_activity_raises():
    win = Window()
    win.create(True)
    win.post_event(Event(EventType.CLOSED))
    with pytest.raises(RuntimeError):
        win.handle_event()


def test_update_passes_dt():
    act = Recorder()
    win = make_window(act)
    win.update(0.25)
    win.update(0.5)
    assert act.dts == [0.25, 0.5]


def test_update_without_activity_raises():
    win = Window()
    with pytest.raises(RuntimeError):
        win.update(0.1)


def test_on_system_loop_forwards():
    act = Recorder()
    win = make_window(act)
    win.on_system_loop(True)
    win.on_system_loop(False)
    assert act.calls[-2:] == ["enter", "exit"]


def test_close_stops_activity():
    act = Recorder()
    win = make_window(act)
    win.close()
    assert act.calls[-1] == "stop"
    assert win.activity is None
    assert not win.is_open()


def test_set_size_windowed():
    win = Window()
    win.set_size((800, 600))
    assert win.size == (800, 600)
    assert win.view == (0.0, 0.0, 800.0, 600.0)


def test_set_size_ignored_when_not_windowed():
    win = FullscreenWindow()
    Window.set_size(win, (800, 600))
    assert win.size == Window().size
    assert win.size == (0, 0)
    assert win.window_status is WindowStatus.FULLSCREEN


def test_resize_surface_leaves_view():
    win = Window()
    win.set_view(100, 50)
    win.resize_surface((300, 200))
    assert win.size == (300, 200)
    assert win.view == (0.0, 0.0, 100.0, 50.0)


def test_check_size_as_resized_sends_event():
    act = Recorder()
    win = ResizingWindow()
    win.create(True)
    win.change_activity(act)
    win.handle_event()
    win.sizing_as_resized = True
    win.real_size = (320, 240)
    win.check_size_in_system_loop()
    assert win.size == (320, 240)
    assert win.view == (0.0, 0.0, 320.0, 240.0)
    assert act.events == [Event(EventType.RESIZED, 320, 240)]
    win.check_size_in_system_loop()
    assert len(act.events) == 1


def test_check_size_without_resized_only_surface():
    act = Recorder()
    win = ResizingWindow()
    win.create(True)
    win.change_activity(act)
    win.handle_event()
    win.real_size = (320, 240)
    Window.check_size_in_system_loop(win)
    assert win.size == (320, 240)
    assert win.view == Window().view
    assert win.view == (0.0, 0.0, 0.0, 0.0)
    assert act.events == []


def test_mark_waiting_for_stop():
    win = Window()
    win.mark_waiting_for_stop()
    assert win.waiting_for_stop is True