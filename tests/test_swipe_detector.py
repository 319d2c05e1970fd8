from typing import List

from swipe_listener.gestures.swipe_detector import (
    ActivitySinkError,
    DisplayMetrics,
    GestureState,
    ThreeFingerSwipeDetector,
)
from swipe_listener.utils.gesture_utils import EventFrame, MotionPhase, PointerSample

SCREEN_WIDTH = 1080
SCREEN_HEIGHT = 2400


class RecordingCallbacks:
    def __init__(self) -> None:
        self.swipes = 0

    def on_swipe_three_finger(self) -> None:
        self.swipes += 1


class RecordingSink:
    def __init__(self, fail: bool = False) -> None:
        self.calls: List[bool] = []
        self.fail = fail

    def set_swipe_gesture_active(self, active: bool) -> None:
        self.calls.append(active)
        if self.fail:
            raise ActivitySinkError("service unavailable")


def make_detector(density=2.0, sink=None, boot_completed=lambda: True,
                  device_provisioned=lambda: True, latch_flags=True):
    callbacks = RecordingCallbacks()
    detector = ThreeFingerSwipeDetector(
        DisplayMetrics(density, SCREEN_WIDTH, SCREEN_HEIGHT),
        callbacks,
        activity_sink=sink,
        boot_completed=boot_completed,
        device_provisioned=device_provisioned,
    )
    if latch_flags:
        # One frame latches boot completed, the next latches provisioned
        for _ in range(2):
            detector.on_event(EventFrame(MotionPhase.UP))
    return detector, callbacks


def fingers(*ys, ids=(0, 1, 2), xs=(400, 500, 600)):
    return [PointerSample(pid, x, y) for pid, x, y in zip(ids, xs, ys)]


def down(t=0.0, y=500):
    return EventFrame(MotionPhase.DOWN, fingers(y), t, 0.0)


def three_down(t=50.0, ys=(500, 500, 500)):
    return EventFrame(MotionPhase.POINTER_DOWN, fingers(*ys), t, 0.0)


def move(ys, t=100.0, ids=(0, 1, 2)):
    return EventFrame(MotionPhase.MOVE, fingers(*ys, ids=ids), t, 0.0)


def start_swipe(detector):
    detector.on_event(down())
    detector.on_event(three_down())
    assert detector.state == GestureState.DETECTING


def test_thresholds_scale_with_density() -> None:
    detector, _ = make_detector(density=2.0)
    assert detector.edge_threshold == 100
    assert detector.gesture_threshold == 300

    detector, _ = make_detector(density=1.5)
    assert detector.edge_threshold == 75
    assert detector.gesture_threshold == 225


def test_three_fingers_start_tracking_by_id() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(EventFrame(MotionPhase.POINTER_DOWN, fingers(500, 510, 520, ids=(7, 3, 9)), 50.0, 0.0))
    assert detector.state == GestureState.DETECTING
    assert detector.tracked_pointers == {7: 500, 3: 510, 9: 520}


def test_swipe_fires_at_exact_threshold() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)

    detector.on_event(move((600, 600, 599)))
    assert detector.state == GestureState.DETECTING
    assert callbacks.swipes == 0

    detector.on_event(move((600, 600, 600)))
    assert detector.state == GestureState.DETECTED_TRUE
    assert callbacks.swipes == 1


def test_swipe_fires_once_per_epoch() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)

    detector.on_event(move((650, 650, 650)))
    detector.on_event(move((500, 500, 500)))
    detector.on_event(move((700, 700, 700)))
    assert detector.state == GestureState.DETECTED_TRUE
    assert callbacks.swipes == 1


def test_upward_motion_does_not_fire() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)
    detector.on_event(move((100, 100, 100)))
    assert detector.state == GestureState.DETECTING
    assert callbacks.swipes == 0


def test_pointer_order_change_is_resolved_by_id() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)

    # Same fingers reported in a different order; only finger 0 moved far
    frame = EventFrame(MotionPhase.MOVE, [
        PointerSample(2, 600, 500),
        PointerSample(0, 400, 800),
        PointerSample(1, 500, 500),
    ], 100.0, 0.0)
    detector.on_event(frame)
    assert detector.state == GestureState.DETECTED_TRUE
    assert callbacks.swipes == 1


def test_missing_tracked_pointer_aborts() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)

    detector.on_event(move((900, 900, 900), ids=(0, 1, 5)))
    assert detector.state == GestureState.DETECTED_FALSE
    assert callbacks.swipes == 0


def test_finger_lift_aborts_until_next_down() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)

    detector.on_event(EventFrame(MotionPhase.MOVE, fingers(600, 600), 100.0, 0.0))
    assert detector.state == GestureState.DETECTED_FALSE

    detector.on_event(move((900, 900, 900)))
    assert detector.state == GestureState.DETECTED_FALSE
    assert callbacks.swipes == 0


def test_fourth_finger_aborts() -> None:
    detector, _ = make_detector()
    start_swipe(detector)
    frame = EventFrame(MotionPhase.POINTER_DOWN,
                       fingers(500, 500, 500, 500, ids=(0, 1, 2, 3), xs=(400, 500, 600, 700)),
                       80.0, 0.0)
    detector.on_event(frame)
    assert detector.state == GestureState.DETECTED_FALSE


def test_down_resets_any_state() -> None:
    detector, callbacks = make_detector()
    start_swipe(detector)
    detector.on_event(move((600, 600, 600)))
    assert detector.state == GestureState.DETECTED_TRUE

    detector.on_event(down(t=1000.0))
    assert detector.state == GestureState.NONE

    detector.on_event(EventFrame(MotionPhase.POINTER_DOWN, fingers(500, 500, 500), 1050.0, 1000.0))
    assert detector.state == GestureState.DETECTING
    detector.on_event(EventFrame(MotionPhase.MOVE, fingers(600, 600, 600), 1100.0, 1000.0))
    assert callbacks.swipes == 2


def test_start_rejected_after_timeout() -> None:
    detector, callbacks = make_detector()
    detector.on_event(down())
    detector.on_event(three_down(t=501.0))
    assert detector.state == GestureState.NO_DETECT

    detector.on_event(move((900, 900, 900), t=600.0))
    assert detector.state == GestureState.NO_DETECT
    assert callbacks.swipes == 0


def test_start_accepted_at_timeout_boundary() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(three_down(t=500.0))
    assert detector.state == GestureState.DETECTING


def test_start_rejected_near_bottom_edge() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(three_down(ys=(SCREEN_HEIGHT - 250, SCREEN_HEIGHT - 200, SCREEN_HEIGHT - 50)))
    assert detector.state == GestureState.NO_DETECT


def test_start_accepted_on_edge_margin() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(three_down(ys=(SCREEN_HEIGHT - 100,) * 3))
    assert detector.state == GestureState.DETECTING


def test_start_rejected_for_vertical_spread() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    # density 2 allows 300px of vertical spread
    detector.on_event(three_down(ys=(500, 650, 801)))
    assert detector.state == GestureState.NO_DETECT

    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(three_down(ys=(500, 650, 800)))
    assert detector.state == GestureState.DETECTING


def test_start_rejected_for_horizontal_spread() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    frame = EventFrame(MotionPhase.POINTER_DOWN,
                       fingers(500, 500, 500, xs=(0, 500, 1081)), 50.0, 0.0)
    assert detector.check_is_start_three_gesture(frame) is False

    frame = EventFrame(MotionPhase.POINTER_DOWN,
                       fingers(500, 500, 500, xs=(0, 500, 1080)), 50.0, 0.0)
    assert detector.check_is_start_three_gesture(frame) is True


def test_two_fingers_never_start() -> None:
    detector, _ = make_detector()
    detector.on_event(down())
    detector.on_event(EventFrame(MotionPhase.POINTER_DOWN, fingers(500, 500), 30.0, 0.0))
    detector.on_event(EventFrame(MotionPhase.MOVE, fingers(900, 900), 60.0, 0.0))
    assert detector.state == GestureState.NONE


def test_not_ready_until_both_flags_latch() -> None:
    boot = {'done': False, 'calls': 0}
    provisioned = {'done': False, 'calls': 0}

    def boot_completed():
        boot['calls'] += 1
        return boot['done']

    def device_provisioned():
        provisioned['calls'] += 1
        return provisioned['done']

    detector, callbacks = make_detector(boot_completed=boot_completed,
                                        device_provisioned=device_provisioned,
                                        latch_flags=False)

    detector.on_event(down())
    detector.on_event(three_down())
    detector.on_event(move((900, 900, 900)))
    assert detector.state == GestureState.NONE
    assert callbacks.swipes == 0
    assert provisioned['calls'] == 0

    # The frame that latches boot completed is dropped and does not poll provisioned
    boot['done'] = True
    detector.on_event(three_down())
    assert detector.state == GestureState.NONE
    assert provisioned['calls'] == 0

    detector.on_event(three_down())
    assert detector.state == GestureState.NONE
    assert provisioned['calls'] == 1

    # The frame that latches provisioned is dropped as well
    provisioned['done'] = True
    detector.on_event(three_down())
    assert detector.state == GestureState.NONE
    assert provisioned['calls'] == 2

    detector.on_event(down())
    detector.on_event(three_down())
    assert detector.state == GestureState.DETECTING

    # Latched flags are not queried again
    boot_calls, provisioned_calls = boot['calls'], provisioned['calls']
    detector.on_event(move((600, 600, 600)))
    assert callbacks.swipes == 1
    assert (boot['calls'], provisioned['calls']) == (boot_calls, provisioned_calls)


def test_first_frames_only_latch_ready_flags() -> None:
    detector, _ = make_detector(latch_flags=False)

    detector.on_event(three_down())
    assert detector.state == GestureState.NONE
    detector.on_event(three_down())
    assert detector.state == GestureState.NONE

    detector.on_event(three_down())
    assert detector.state == GestureState.DETECTING


def test_activity_sink_notified_on_real_changes_only() -> None:
    sink = RecordingSink()
    detector, _ = make_detector(sink=sink)

    detector.on_event(down())
    assert sink.calls == []

    detector.on_event(three_down())
    detector.on_event(move((520, 520, 520)))
    detector.on_event(move((600, 600, 600)))
    detector.on_event(move((700, 700, 700)))
    detector.on_event(down(t=1000.0))
    assert sink.calls == [True, True, False]


def test_activity_sink_reports_inactive_for_terminal_failures() -> None:
    sink = RecordingSink()
    detector, _ = make_detector(sink=sink)
    detector.on_event(down())
    detector.on_event(three_down(t=900.0))
    assert detector.state == GestureState.NO_DETECT
    assert sink.calls == [False]


def test_activity_sink_failure_does_not_roll_back() -> None:
    sink = RecordingSink(fail=True)
    detector, callbacks = make_detector(sink=sink)
    start_swipe(detector)
    detector.on_event(move((600, 600, 600)))
    assert detector.state == GestureState.DETECTED_TRUE
    assert callbacks.swipes == 1
    assert sink.calls == [True, True]


def test_cleanup_releases_activity_sink() -> None:
    sink = RecordingSink()
    detector, _ = make_detector(sink=sink)
    start_swipe(detector)
    detector.cleanup()
    detector.on_event(down(t=1000.0))
    assert detector.state == GestureState.NONE
    assert sink.calls == [True]
