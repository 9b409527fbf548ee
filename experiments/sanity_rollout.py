# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact re-simulation

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=4:
  python -m experiments.sanity_rollout --policies both

  # Only heuristic, custom seeds, keep the action traces:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --save-traces

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from flappy_animals.env.flappy_env import FlappyEnv
from flappy_animals.game.assets import AssetStore


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flap_prob: float = 0.15):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return act

def tiny_heuristic_policy_init():
    """
    Very small rule: flap when the player's top edge has sunk below the
    middle of the next gap and the bird is not already rising.
    """
    def act(obs: np.ndarray) -> int:
        y_norm, v_norm, _dx, gap_top, gap_bot = (float(v) for v in obs)
        gap_mid = 0.5 * (gap_top + gap_bot)
        return 1 if (y_norm > gap_mid and v_norm >= 0.0) else 0
    return act


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(env: FlappyEnv,
                    policy_name: str,
                    seed: int,
                    steps_limit: int,
                    save_traces: bool,
                    out_dir: Path) -> Tuple[int, float, int, bool, bool, Optional[str]]:
    """
    Returns: (ep_len, ret_sum, score, terminated, truncated, death_cause)
    Also writes the action trace to disk if requested.
    """
    if policy_name == "random":
        action_seed = 10_000 + seed
        policy = random_policy_init(action_seed)
    elif policy_name == "heuristic":
        action_seed = -1
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError("Unknown policy")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    obs, info = env.reset(seed=seed)
    for _ in range(steps_limit):
        a = policy(obs)
        actions.append(int(a))
        obs, r, term, trunc, info = env.step(a)
        ret_sum += float(r)
        ep_len += 1
        if term or trunc:
            break

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        meta_lines = [
            f"seed={seed}",
            f"frame_skip={env.frame_skip}",
            f"policy={policy_name}",
            f"action_rng_seed={action_seed}",
            f"steps_limit={steps_limit}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return ep_len, ret_sum, int(info.get("score", 0)), bool(term), bool(trunc), info.get("death_cause")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4,
                    help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save action sequences for re-simulation")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "policy_name", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "score",
        "terminated", "truncated", "death_cause",
    ]

    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv}")

    # Skins are decoded once and shared by every episode
    env = FlappyEnv(frame_skip=args.frame_skip, assets=AssetStore.load())
    try:
        for policy_name in to_run:
            for seed in seeds:
                ep_len, ret_sum, score, terminated, truncated, death_cause = run_one_episode(
                    env, policy_name, seed, args.steps, args.save_traces, out_dir
                )
                row = [
                    "FlappyEnv", policy_name, seed, args.frame_skip,
                    ep_len, f"{ret_sum:.1f}", score,
                    int(terminated), int(truncated), (death_cause or ""),
                ]
                write_episode_row(episodes_csv, header, row)
                print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                      f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}  cause={death_cause}")
    finally:
        env.close()

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
