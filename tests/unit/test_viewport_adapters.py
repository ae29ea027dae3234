from types import SimpleNamespace

from atelier.adapters.sentinel import FletScrollSentinel, ManualSentinel
from atelier.adapters.viewport import FixedViewport, FletPageViewport


def test_fixed_viewport_notifies_listeners() -> None:
    viewport = FixedViewport(1024)
    seen: list[float] = []
    unsubscribe = viewport.subscribe(seen.append)

    viewport.resize(600)
    unsubscribe()
    viewport.resize(300)

    assert seen == [600.0]
    assert viewport.current_width() == 300.0


def test_flet_page_viewport_tracks_resize_events() -> None:
    page = SimpleNamespace(width=1280, on_resized=None)
    viewport = FletPageViewport(page)  # type: ignore[arg-type]
    seen: list[float] = []
    viewport.subscribe(seen.append)

    page.on_resized(SimpleNamespace(width=700, height=900))

    assert viewport.current_width() == 700.0
    assert seen == [700.0]


def test_manual_sentinel_reports_transitions_only() -> None:
    sentinel = ManualSentinel()
    seen: list[bool] = []
    disconnect = sentinel.observe(seen.append)

    sentinel.set_visible(True)
    sentinel.set_visible(True)
    sentinel.set_visible(False)
    disconnect()
    sentinel.set_visible(True)

    assert seen == [False, True, False]


def test_scroll_sentinel_visible_near_end() -> None:
    sentinel = FletScrollSentinel(threshold_px=50)
    seen: list[bool] = []
    sentinel.observe(seen.append)

    sentinel.handle_scroll(SimpleNamespace(pixels=100, max_scroll_extent=1000))  # type: ignore[arg-type]
    sentinel.handle_scroll(SimpleNamespace(pixels=960, max_scroll_extent=1000))  # type: ignore[arg-type]

    assert seen == [False, True]
    assert sentinel.visible
