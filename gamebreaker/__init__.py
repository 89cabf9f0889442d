from .config import AgentConfig, EnvConfig, LevelConfig, SpawnRegion
from .env.agent import EpisodeAgent
from .env.env import GoalAreaEnv

__all__ = ["AgentConfig", "EnvConfig", "EpisodeAgent", "GoalAreaEnv", "LevelConfig", "SpawnRegion"]
