import logging
import os
from datetime import datetime
from typing import Optional

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


def default_recording_path(width: int, height: int, directory: str = "recordings") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    fname = f"maze_{width}x{height}_{ts}.mp4"
    if os.path.isdir(directory):
        return os.path.join(directory, fname)
    return fname


class VideoRecorder:
    """Appends pygame frames to an mp4 file. Inactive recorders ignore every call."""

    def __init__(self, active: bool = False, output_file: Optional[str] = None, fps: int = 30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None  # (width, height), fixed by the first frame
        self.frame_count = 0

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        if self.writer is None:
            if not self.output_file:
                self.output_file = default_recording_path(*surface.get_size())
            self.frame_size = surface.get_size()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")

        # surfarray is (width, height, RGB); OpenCV wants (height, width, BGR)
        frame = np.ascontiguousarray(np.transpose(pygame.surfarray.array3d(surface), (1, 0, 2)))
        self.writer.write(cv2.cvtColor(self.fit_frame(frame), cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def fit_frame(self, frame: np.ndarray) -> np.ndarray:
        """Scales a (height, width, 3) frame to the recording size; the writer drops mismatched frames."""
        width, height = self.frame_size
        if frame.shape[1] == width and frame.shape[0] == height:
            return frame
        return cv2.resize(frame, (width, height), interpolation=cv2.INTER_AREA)

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
