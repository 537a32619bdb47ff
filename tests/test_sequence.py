"""Tests for frame sequence assembly."""

import numpy as np
import pytest

from orbitlab.error_handling import ConfigurationError, RenderError
from orbitlab.palette import DEFAULT_PALETTE, Color
from orbitlab.rasterizer import Frame
from orbitlab.sequence import FrameSequence, assemble_sequence



class TestAssembleSequence:
    """Sequential assembly in the calling process."""

    def test_one_frame_per_step(self, solid_pattern):
        sequence = assemble_sequence(solid_pattern(Color.RED, total_steps=5), 6, 4)
        assert len(sequence) == 5
        assert [frame.step for frame in sequence.frames] == [0, 1, 2, 3, 4]
        assert sequence.delays == (0, 0, 0, 0, 0)
        assert sequence.size == (6, 4)
        assert sequence.palette is DEFAULT_PALETTE

    def test_delay_applied_to_every_frame(self, solid_pattern):
        sequence = assemble_sequence(solid_pattern(Color.RED, total_steps=3), 2, 2, delay_ms=40)
        assert sequence.delays == (40, 40, 40)

    def test_frames_follow_pattern(self, disc_pattern):
        sequence = assemble_sequence(disc_pattern, 240, 240)
        assert len(sequence) == 120
        assert sequence.frames[0].color_at(120, 120) == Color.BLACK
        assert sequence.frames[0].color_at(0, 0) == Color.WHITE

    def test_progress_bar_does_not_change_output(self, solid_pattern):
        pattern = solid_pattern(Color.GREEN, total_steps=2)
        quiet = assemble_sequence(pattern, 3, 3)
        loud = assemble_sequence(pattern, 3, 3, show_progress=True)
        for a, b in zip(quiet.frames, loud.frames):
            assert np.array_equal(a.pixels, b.pixels)

    @pytest.mark.parametrize("kwargs", [{"delay_ms": -1}, {"workers": 0}])
    def test_invalid_arguments(self, kwargs, solid_pattern):
        with pytest.raises(ConfigurationError):
            assemble_sequence(solid_pattern(Color.RED), 2, 2, **kwargs)

    def test_invalid_size(self, solid_pattern):
        with pytest.raises(ConfigurationError):
            assemble_sequence(solid_pattern(Color.RED), 0, 2)

    def test_shape_failure_becomes_render_error(self):
        class BrokenPattern:
            total_steps = 2

            def evaluate(self, step, x, y):
                raise ZeroDivisionError("boom")

            def evaluate_grid(self, step, xs, ys):
                raise ZeroDivisionError("boom")

        with pytest.raises(RenderError) as excinfo:
            assemble_sequence(BrokenPattern(), 2, 2)
        assert isinstance(excinfo.value.cause, ZeroDivisionError)


class TestFrameSequence:
    """Validation of the assembled payload."""

    @staticmethod
    def _frame(step: int, size=(2, 2)) -> Frame:
        return Frame(step=step, pixels=np.zeros((size[1], size[0]), dtype=np.uint8))

    def test_delay_count_mismatch(self):
        with pytest.raises(ConfigurationError):
            FrameSequence(frames=(self._frame(0), self._frame(1)), delays=(0,))

    def test_out_of_order_frames(self):
        with pytest.raises(ConfigurationError):
            FrameSequence(frames=(self._frame(1), self._frame(0)), delays=(0, 0))

    def test_mixed_sizes(self):
        with pytest.raises(ConfigurationError):
            FrameSequence(frames=(self._frame(0), self._frame(1, size=(3, 2))), delays=(0, 0))

    def test_empty(self):
        with pytest.raises(ConfigurationError):
            FrameSequence(frames=(), delays=())
