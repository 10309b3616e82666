import logging
import os
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

RECORDINGS_DIR = "recordings"

def recording_path(prefix: str, name: str) -> str:
    """recordings/<prefix>_<name>_<timestamp>.mp4, creating the directory if needed."""
    os.makedirs(RECORDINGS_DIR, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(RECORDINGS_DIR, f"{prefix}_{name}_{ts}.mp4")

def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
    # array3d is (width, height, 3) RGB, OpenCV wants (height, width, 3) BGR
    view = pygame.surfarray.array3d(surface)
    frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
    return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

class VideoRecorder:
    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = recording_path("maze", "view")

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        frame = surface_to_frame(surface)
        if self.writer is None:
            height, width = frame.shape[:2]
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, (width, height))
            logger.info(f"Recording started: {self.output_file}")

        self.writer.write(frame)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
