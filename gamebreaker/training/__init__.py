"""Training-side bookkeeping for GameBreaker.

- episode_recorder: High score, best episode and lifetime step tracking (EpisodeRecorder)
"""

from gamebreaker.training.episode_recorder import EpisodeRecorder

__all__ = ["EpisodeRecorder"]
