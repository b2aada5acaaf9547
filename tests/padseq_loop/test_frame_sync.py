"""
Tests for FrameSync render loop
"""

import asyncio
from unittest.mock import Mock

import pytest
from padseq_loop.engine import FrameSync


class TestFlush:
    """Test timestamp-ordered commits"""

    def test_runs_due_commits_in_time_order(self):
        frames = FrameSync(now=lambda: 0.0)
        order: list[str] = []
        frames.schedule(lambda: order.append("b"), 0.2)
        frames.schedule(lambda: order.append("a"), 0.1)
        frames.schedule(lambda: order.append("c"), 0.3)

        assert frames.flush(0.25) == 2
        assert order == ["a", "b"]
        assert frames.pending == 1

    def test_same_timestamp_keeps_insertion_order(self):
        frames = FrameSync()
        order: list[int] = []
        for i in range(3):
            frames.schedule(lambda i=i: order.append(i), 1.0)
        frames.flush(1.0)
        assert order == [0, 1, 2]

    def test_failing_commit_does_not_block_others(self):
        frames = FrameSync()
        after = Mock()
        frames.schedule(Mock(side_effect=RuntimeError("boom")), 0.0)
        frames.schedule(after, 0.0)
        frames.flush(0.0)
        after.assert_called_once()

    def test_clear(self):
        frames = FrameSync()
        frames.schedule(Mock(), 0.0)
        frames.clear()
        assert frames.pending == 0


class TestFrameListeners:
    """Test per-frame listeners"""

    def test_render_frame_flushes_then_notifies(self):
        frames = FrameSync(now=lambda: 5.0)
        events: list[str] = []
        frames.schedule(lambda: events.append("commit"), 4.0)
        frames.add_frame_listener(lambda now: events.append(f"frame@{now}"))

        frames.render_frame()

        assert events == ["commit", "frame@5.0"]

    def test_remove_listener(self):
        frames = FrameSync()
        listener = Mock()
        remove = frames.add_frame_listener(listener)
        remove()
        frames.render_frame(0.0)
        listener.assert_not_called()

    @pytest.mark.asyncio
    async def test_run_loop_renders_until_stopped(self):
        frames = FrameSync(fps=200)
        listener = Mock()
        frames.add_frame_listener(listener)

        task = asyncio.create_task(frames.run())
        await asyncio.sleep(0.05)
        frames.stop()
        await asyncio.wait_for(task, timeout=1.0)

        assert listener.call_count >= 2
