import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np

from maze_stepper.algo.base import StepStatus
from maze_stepper.core.config import MazeConfig
from maze_stepper.core.controller import MazeController, RunPhase
from maze_stepper.viz.recorder import VideoRecorder
from maze_stepper.viz.renderer import Renderer


class TestRendererTiming(unittest.TestCase):
    def test_zero_delay_steps_once_per_frame(self):
        controller = MazeController(MazeConfig(width=4, height=4, seed=1, autostart=True))
        renderer = Renderer(controller, delay=0.0)
        for expected in range(1, 6):
            renderer.update(1 / 60)
            self.assertEqual(controller.generator.step_count, expected)

    def test_delay_accumulates_steps(self):
        controller = MazeController(MazeConfig(width=6, height=6, seed=1, autostart=True))
        renderer = Renderer(controller, delay=0.01)
        renderer.update(0.035)
        self.assertEqual(controller.generator.step_count, 3)
        renderer.update(0.006)
        self.assertEqual(controller.generator.step_count, 4)

    def test_paused_controller_is_not_stepped(self):
        controller = MazeController(MazeConfig(width=4, height=4, seed=1))
        renderer = Renderer(controller, delay=0.0)
        renderer.update(1.0)
        self.assertEqual(controller.generator.step_count, 0)
        self.assertEqual(controller.phase, RunPhase.GENERATING_PAUSED)

    def test_zero_delay_runs_to_completion(self):
        controller = MazeController(MazeConfig(width=2, height=2, seed=1, autostart=True))
        renderer = Renderer(controller, delay=0)
        for _ in range(20):
            renderer.update(1 / 60)
        self.assertEqual(controller.phase, RunPhase.GENERATION_DONE)
        self.assertEqual(controller.step().status, StepStatus.IDLE)


class TestRecorderFrames(unittest.TestCase):
    def test_resized_frames_match_recording_size(self):
        recorder = VideoRecorder(active=True)
        recorder.frame_size = (80, 60)

        same = np.zeros((60, 80, 3), dtype=np.uint8)
        self.assertIs(recorder.fit_frame(same), same)

        bigger = np.zeros((120, 200, 3), dtype=np.uint8)
        self.assertEqual(recorder.fit_frame(bigger).shape, (60, 80, 3))
        smaller = np.zeros((30, 50, 3), dtype=np.uint8)
        self.assertEqual(recorder.fit_frame(smaller).shape, (60, 80, 3))


if __name__ == '__main__':
    unittest.main()
