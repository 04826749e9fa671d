# mysteryengine

The core of a small game engine, as a Python library. It has no command-line program.

## What is in it

- `mysteryengine.window`: `Window` hosts one `Activity` at a time. `change_activity()` queues a
  new one, which takes over at the next `handle_event()` (its `prepare()` must return True; the
  old activity is then stopped). Events (`Event`, `EventType`) are queued with `post_event()` and
  passed to the activity; a `RESIZED` event also resets the view. `WindowStatus` tells whether
  the window is windowed, borderless or fullscreen.
- `mysteryengine.activity`: `Activity`, the abstract base for one screen of a program
  (`prepare`, `start`, `stop`, `handle_event`, `update`, plus `on_enter_sysloop` /
  `on_exit_sysloop`).
- `mysteryengine.carnival`: `Carnival` runs windows in a main loop, in single-window or
  multiple-window mode, until every window is waiting for stop. Errors raised in the loop are
  reported through `show_error_message_box()` rather than raised. A shared instance is managed
  with `Carnival.setup()`, `Carnival.instance()` and `Carnival.drop()`.
- `mysteryengine.callbacks`: `EngineCallbacks`, the `on_idle` and `on_system_loop` hooks that a
  carnival points at its own handlers while `run()` is active.
- `mysteryengine.bgm`: `read_comment_data()` and `read_loop_point()` find the
  `OHMSSPC=>OFFSET:LENGTH<` comment (microseconds) in an Ogg stream and return a `LoopPoint`, or
  raise `LoopPointError`. `BGM` opens an Ogg Vorbis file, reads its channel count, sample rate,
  length and loop point, turns looping on, and keeps track of status (`BGMStatus`), volume and
  playing position against a clock, wrapping around the loop span.
- `mysteryengine.global_bgm`: `GlobalBGM` carries out queued `play()` / `stop()` commands on a
  worker thread, fading the current track out over 0.2 s before stopping or replacing it.
- `mysteryengine.camera`: `Camera` with `CameraType.ORTHOGRAPHIC`, `PERSPECTIVE` and `OBLIQUE`
  projections, lazily rebuilt `mat_p`, `mat_v` and `mat_pv`, and picking helpers
  `point_from_ndc_to_world()`, `direction_from_ndc_to_world()` and
  `direction_from_ndc_to_camera()`.
- `mysteryengine.glmath`: numpy 4x4 helpers `identity`, `translate`, `scale`, `rotate`,
  `ortho`, `perspective` and `vec3` (column vectors, OpenGL clip-space conventions).
- `mysteryengine.transforms`: mixins `Translatable`, `Rotatable`, `Scalable` and `Originable`,
  each with a `*_changed` flag.
- `mysteryengine.model`: `Model`, an abstract drawable with position, rotation and scale and
  `compute_matrix_default()` / `model_matrix`.
- `mysteryengine.vertex`: `Vertex` and the `VertexAttribute` slots.
- `mysteryengine.tempguard`: `TempGuard`, a context manager that restores an attribute on exit.
- `mysteryengine.reference`: `Reference`, a rebindable, possibly empty handle.
- `mysteryengine.randgen`: `RandomGenerator`, a 32-bit Mersenne Twister seeded like MT19937,
  and a shared generator behind `reseed()`, `get()` and `get_uni01()`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

A window with one activity, run in single-window mode:

```python
from mysteryengine.activity import Activity
from mysteryengine.carnival import Carnival
from mysteryengine.window import Event, EventType


class Hello(Activity):
    def prepare(self, window):
        self.window = window
        return True

    def start(self):
        print("started")

    def stop(self):
        print("stopped")

    def handle_event(self, event):
        if event.type is EventType.CLOSED:
            self.window.mark_waiting_for_stop()
        return False

    def update(self, dt):
        pass


carnival = Carnival(multiple_windows=False)
carnival.emplace_window(Hello())
carnival.windows[0].post_event(Event(EventType.CLOSED))
carnival.run()
```

A camera:

```python
from mysteryengine.camera import Camera, CameraType

camera = Camera()
camera.camera_type = CameraType.PERSPECTIVE
camera.fov = 60.0
camera.aspect_ratio = 16 / 9
camera.place(x=0.0, y=-5.0, z=2.0)
pv = camera.mat_pv                       # 4x4 numpy array
point = camera.point_from_ndc_to_world((0.0, 0.0, 0.0, 1.0))
```

A music track and its loop point:

```python
from mysteryengine.bgm import BGM, read_loop_point

with open("theme.ogg", "rb") as stream:
    print(read_loop_point(stream))       # LoopPoint(offset=..., length=...)

bgm = BGM()
bgm.open_from_file("theme.ogg")
bgm.play()
print(bgm.status, bgm.time, bgm.loop_points)
```

Temporarily replacing an attribute:

```python
from types import SimpleNamespace
from mysteryengine.tempguard import TempGuard

settings = SimpleNamespace(volume=80.0)
with TempGuard(settings, "volume") as guard:
    guard.set(0.0)
assert settings.volume == 80.0
```

Random numbers:

```python
from mysteryengine import randgen
from mysteryengine.randgen import RandomGenerator

randgen.reseed()
value = randgen.get()          # unsigned 32-bit integer
chance = randgen.get_uni01()   # float in [0, 1)
fixed = RandomGenerator(5489).get()
```

## What it does not do

- `BGM` does not decode or play sound. It reads the stream's headers and loop point and keeps
  an accurate playback state and position, which a program can hand to an audio backend of its
  own; `GlobalBGM` drives such a `BGM` (or whatever its `factory` returns).
- `Window` does not open anything on screen. Its surface, view and event queue live in memory;
  a platform layer can subclass it and override `_open_native` and `_realtime_size`.
- `Carnival.show_error_message_box()` prints to standard error, `set_sleep_enabled()` and
  `reset_sleep_counter()` only record their state, and `system_message_pump()` dispatches
  callables queued with `post_message()`.
- There is no renderer, shader or scene: `Model.draw()` is left to subclasses, and the camera
  and `glmath` only compute matrices.