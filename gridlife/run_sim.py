"""CLI entrypoint: solve or plan, run one episode, trace and persist it.

This thin module owns argument parsing, logging setup and output dispatch;
the solvers, planner and drivers live in their own packages.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from random import Random

from gridlife.config.constants import INITIAL_ENERGY
from gridlife.config.types import LifeConfig, PlannerConfig
from gridlife.domain.actions import action_label
from gridlife.domain.state import initial_state
from gridlife.errors import InvalidConfiguration
from gridlife.io.paths import episode_summary_path, trajectory_path, trajectory_plot_path
from gridlife.io.schemas import TRAJECTORY_SCHEMA_VERSION
from gridlife.simulation.engine import EpisodeResult, run_planner_episode, run_policy_episode
from gridlife.simulation.persistence import write_trajectory
from gridlife.solvers.value_iteration import solve_life_mdp

logger = logging.getLogger(__name__)

MODES = ("mdp", "pomdp")


def _base_config(mode: str) -> LifeConfig:
    if mode == "mdp":
        return LifeConfig.fully_observable()
    return LifeConfig.partially_observable()


def _with_rollouts(config: LifeConfig, n_rollouts: int) -> LifeConfig:
    planner = PlannerConfig(**{**config.to_dict()["planner"], "n_rollouts": n_rollouts})
    return LifeConfig(
        world=config.world, rewards=config.rewards, solver=config.solver, planner=planner
    )


def print_trace(result: EpisodeResult) -> None:
    """Print every step the way an interactive stepthrough would."""
    for record in result.records:
        print(f"s = {record.state}")
        print(f"a = {action_label(record.action)}")
        if record.observation is not None:
            print(f"o = {record.observation}")
        print(f"r = {record.reward}")
        print(f"Current undiscounted reward total is {record.cumulative_reward}")
        print()
    if result.termination_reason == "starvation":
        print("AGENT DIED OF STARVATION")
    elif result.termination_reason == "old_age":
        print("AGENT DIED OF OLD AGE")


def episode_summary(result: EpisodeResult, seed: int) -> dict[str, object]:
    final = result.final_state
    return {
        "run_id": result.run_id,
        "mode": result.mode,
        "seed": seed,
        "steps": len(result.records),
        "total_reward": result.total_reward,
        "survived": result.survived,
        "terminated_at": result.terminated_at,
        "termination_reason": result.termination_reason,
        "final_state": None if final is None else str(final),
    }


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _get_int(cli_val: int | None, key: str, run_cfg: dict[str, object], default: int) -> int:
    """CLI > file > default resolution for integer values."""
    if cli_val is not None:
        return cli_val
    return _coerce_int(run_cfg.get(key, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run a gridworld life simulation episode")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--mode", choices=MODES, default="mdp")
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--rollouts", type=int, default=None)
    parser.add_argument("--energy", type=int, default=None, help="Initial agent energy")
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--trace", action=argparse.BooleanOptionalAction, default=False)
    parser.add_argument("--plot", action=argparse.BooleanOptionalAction, default=False)
    parser.add_argument("--verbose", action=argparse.BooleanOptionalAction, default=False)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run one episode.

    Supports ``--config path/to/config.json`` holding the nested
    ``world``/``rewards``/``solver``/``planner`` sections plus an optional
    ``run`` section (``steps``, ``energy``). CLI arguments override
    config-file values; config-file values override the preset for the
    chosen mode.
    """
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        file_cfg = json.loads(Path(args.config).read_text())
    run_cfg = file_cfg.pop("run", {}) or {}
    if not isinstance(run_cfg, dict):
        raise InvalidConfiguration("config 'run' section must be an object")

    config = LifeConfig.from_dict(file_cfg, base=_base_config(args.mode))
    if args.rollouts is not None:
        config = _with_rollouts(config, args.rollouts)
    default_steps = 10 if args.mode == "mdp" else 100
    steps = _get_int(args.steps, "steps", run_cfg, default_steps)
    energy = _get_int(args.energy, "energy", run_cfg, INITIAL_ENERGY)
    start = initial_state(energy=energy)
    rng = Random(args.seed)
    run_id = f"{args.mode}_seed{args.seed}"

    if args.mode == "mdp":
        solved = solve_life_mdp(config)
        logger.info(
            "Solved %d states in %d sweeps (converged=%s)",
            len(solved.policy),
            solved.iterations,
            solved.converged,
        )
        result = run_policy_episode(config, solved.policy, start, steps, rng, run_id=run_id)
    else:
        result = run_planner_episode(config, start, steps, rng, run_id=run_id)

    if args.trace:
        print_trace(result)

    summary = episode_summary(result, args.seed)
    if args.out_dir is not None:
        out_dir = Path(args.out_dir)
        log_path = write_trajectory(result, trajectory_path(out_dir))
        episode_summary_path(out_dir).write_text(
            json.dumps(
                {
                    "schema_version": TRAJECTORY_SCHEMA_VERSION,
                    **summary,
                    "config": config.to_dict(),
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        summary["trajectory"] = str(log_path)
        if args.plot and result.records:
            from gridlife.viz.render import render_trajectory

            plot_path = render_trajectory(
                log_path,
                trajectory_plot_path(out_dir),
                config.world.grid_size,
                max_age=config.world.max_age,
            )
            summary["plot"] = str(plot_path)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
