"""
joust - Game session state

Holds what the watch app keeps between timer callbacks: whether a test is
running, how many tests have been started, the previous accelerometer
sample and the current tick. step() turns one new sample into a JoustTick
decision. Sampling, the timer, the vibration motor and the screen belong to
the host loop that calls it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

import config_persistence
from config import Config
from jerk import AccelSample, jerk_magnitude, jerk_vector
from line import Line
from line_path import LinePath, project
from logging_utils import log_event, set_log_level


@dataclass
class JoustTick:
    """Outcome of one game tick"""
    tick: int
    delta: Tuple[int, int, int]
    magnitude: int
    threshold: int
    testing: bool
    test_num: int
    pulse: bool            # True when the host should buzz


@dataclass
class JoustSession:
    song: Line = field(default_factory=Line)
    fixed_threshold: int = 2000
    testing: bool = False
    test_num: int = 0
    tick: int = 0
    prev_sample: AccelSample = field(default_factory=AccelSample)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "JoustSession":
        """Build a session whose song is converted from milliseconds to ticks.

        Without a config the saved one is loaded (defaults if none). The
        config's log level is applied globally.
        """
        if config is None:
            config = config_persistence.load_config()
        set_log_level(config.log_level)
        song = Line(config.song.points_ms)
        if len(song) >= 2:
            song.convert_units(config.game.tick_ms)
        else:
            log_event("WARN", "Session", "Song has fewer than 2 points, using fixed threshold",
                      threshold=config.game.fixed_threshold)
        return cls(song=song, fixed_threshold=config.game.fixed_threshold)

    def toggle_testing(self) -> bool:
        """Start or stop a test run. Starting one bumps test_num."""
        self.testing = not self.testing
        if self.testing:
            self.test_num += 1
        log_event("INFO", "Session", "Testing toggled", testing=self.testing, test_num=self.test_num)
        return self.testing

    def reset(self, sample: AccelSample) -> None:
        """Take the reference sample the first jerk is measured against."""
        self.prev_sample = AccelSample(*sample)
        self.tick = 0

    def threshold(self) -> int:
        if self.song.degenerate:
            return self.fixed_threshold
        return self.song.evaluate(self.tick)

    def step(self, sample: AccelSample) -> JoustTick:
        sample = AccelSample(*sample)
        delta = jerk_vector(self.prev_sample, sample)
        magnitude = jerk_magnitude(self.prev_sample, sample)
        self.prev_sample = sample

        threshold = self.threshold()
        pulse = self.testing and magnitude > threshold
        result = JoustTick(
            tick=self.tick,
            delta=delta,
            magnitude=magnitude,
            threshold=threshold,
            testing=self.testing,
            test_num=self.test_num,
            pulse=pulse,
        )
        if self.testing:
            log_event("DEBUG", "Session", "Tick",
                      tick=self.tick, magnitude=magnitude, threshold=threshold, pulse=pulse)
        self.tick += 1
        return result

    def graph(self, config: Optional[Config] = None) -> LinePath:
        """Project the song for drawing. The caller releases the result."""
        graph = (config or Config()).graph
        return project(self.song, graph.width, graph.height, graph.baseline_height)
