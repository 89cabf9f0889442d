# ruff: noqa: E402
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gamebreaker import AgentConfig, EnvConfig, GoalAreaEnv
from gamebreaker.agents.heuristic import RandomHeuristicPolicy
from gamebreaker.records.history import GameLog, summarize
from gamebreaker.training.episode_recorder import EpisodeRecorder


def run_episode(env: GoalAreaEnv, policy: RandomHeuristicPolicy) -> dict:
    obs, _ = env.reset()

    steps = 0
    while True:
        obs, _reward, terminated, truncated, info = env.step(policy.act(obs))
        steps += 1
        if terminated or truncated:
            break

    episode = info["episode"]
    return {"steps": steps, "reward": round(episode["cumulative_reward"], 3), "reason": episode["reason"]}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-steps", type=int, default=1000, help="Step budget for penalty and timeout")
    parser.add_argument("--cap", type=int, default=1000, help="External episode-length cap (must be positive)")
    parser.add_argument("--mode", type=str, default="relative", choices=["relative", "local"])
    parser.add_argument("--level", type=str, default="level_2")
    parser.add_argument("--out", type=str, default="results/gamelog.txt", help="Game log path")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    # Episodes end only at the goal or at the cap.
    if args.cap <= 0:
        parser.error("--cap must be positive")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    game_log = GameLog(Path(args.out))
    cfg = EnvConfig(
        agent=AgentConfig(max_steps=args.max_steps, observation_mode=args.mode, level=args.level),
        episode_step_cap=args.cap,
        seed=args.seed,
    )
    env = GoalAreaEnv(cfg, recorder=EpisodeRecorder(sink=game_log.append))
    policy = RandomHeuristicPolicy(env.rng)

    for ep in range(args.episodes):
        result = run_episode(env, policy)
        print(f"episode {ep}: {result}")

    print(f"telemetry: {env.agent.telemetry()}")
    print(f"log summary: {summarize(game_log.read())}")


if __name__ == "__main__":
    main()
