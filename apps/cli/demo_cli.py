"""Command-line front end for the engine: generate puzzles (single or batch), solve or validate a grid read from JSON."""

# demo_cli.py
# - generate: one puzzle (JSON payload with puzzle + solution), or a batch with --count
# - solve:    read {"grid": [[...]]} from a JSON file and complete it
# - validate: read {"grid": [[...]]} and list conflicts
#
# Usage:
#   python -m apps.cli.demo_cli generate --size 8 --difficulty Hard --seed 123
#   python -m apps.cli.demo_cli generate --size 6 --count 200 --out puzzles.jsonl
#   python -m apps.cli.demo_cli solve --grid puzzle.json --size 6
#   python -m apps.cli.demo_cli validate --grid current.json --size 6
#
# Settings come from configs/engine.yaml (or --config); flags override them.

import argparse
import json
import sys
from pathlib import Path

import numpy as np
from tqdm import tqdm

from zootiles.config import constraints_from_config, load_engine_config, symbol_alphabet
from zootiles.logs import BatchProgress, ProgressConfig, log
from zootiles.solver_core import ZooTilesError
from zootiles.zoo_tools import generate_tool, make_constraints, solve_tool, validate_tool


def render_grid(grid, subgrid_rows, subgrid_cols, blank="·"):
    """Plain-text board with subgrid separators."""
    n = len(grid)
    lines = []
    for r, row in enumerate(grid):
        parts = []
        for c, v in enumerate(row):
            parts.append(blank if v is None else str(v))
            if (c + 1) % subgrid_cols == 0 and c + 1 < n:
                parts.append("|")
        lines.append(" ".join(parts))
        if (r + 1) % subgrid_rows == 0 and r + 1 < n:
            lines.append("-" * len(lines[-1]))
    return "\n".join(lines)


def read_grid(path):
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    # accept a bare list of rows or {"grid": ...} / generate output {"puzzle": ...}
    if isinstance(data, dict):
        data = data.get("grid") or data.get("puzzle")
    if not isinstance(data, list):
        raise ZooTilesError(f"{path}: no grid found")
    return data


def batch_stats(payloads):
    empties = np.array([p["empty"] for p in payloads], dtype=np.float64)
    steps = np.array([p["steps"] for p in payloads], dtype=np.float64)
    return {
        "count": len(payloads),
        "empty_mean": float(empties.mean()),
        "empty_std": float(empties.std()),
        "steps_mean": float(steps.mean()),
        "steps_p95": float(np.percentile(steps, 95)),
    }


def cmd_generate(args, cfg):
    constraints = constraints_from_config(cfg)
    if args.count <= 1:
        payload = generate_tool(constraints, cfg.difficulty, cfg.seed, cfg.unique)
        if not args.quiet:
            log(f"generated {payload['id']}: {payload['empty']} blanks, {payload['steps']} solver steps")
            print(render_grid(payload["puzzle"], constraints.subgrid_rows, constraints.subgrid_cols), file=sys.stderr)
        return payload

    base = cfg.seed
    payloads = []
    progress = BatchProgress(ProgressConfig(log_every=args.log_every, log_every_secs=10.0), args.count, quiet=args.quiet)
    out = open(args.out, "w", encoding="utf-8") if args.out else None
    try:
        for i in tqdm(range(args.count), desc="generate", disable=args.quiet, file=sys.stderr):
            seed = None if base is None else base + i
            payload = generate_tool(constraints, cfg.difficulty, seed, cfg.unique)
            payloads.append(payload)
            if out is not None:
                out.write(json.dumps(payload, ensure_ascii=False) + "\n")
            progress.update(i + 1, payload["steps"])
    finally:
        if out is not None:
            out.close()
    stats = batch_stats(payloads)
    log(f"batch done: {stats}", quiet=args.quiet)
    if args.out:
        return {"out": str(Path(args.out)), "stats": stats}
    return {"puzzles": payloads, "stats": stats}


def cmd_solve(args, cfg):
    size = int(cfg.grid_size)
    constraints = make_constraints(size, alphabet=symbol_alphabet(cfg.symbols, size))
    result = solve_tool(read_grid(args.grid), constraints)
    if not result["solved"]:
        log("no completion exists for this grid", quiet=args.quiet)
    elif not args.quiet:
        log(f"solved in {result['steps']} steps")
        print(render_grid(result["solution"], constraints.subgrid_rows, constraints.subgrid_cols), file=sys.stderr)
    return result


def cmd_validate(args, cfg):
    size = int(cfg.grid_size)
    constraints = make_constraints(size, alphabet=symbol_alphabet(cfg.symbols, size))
    result = validate_tool(read_grid(args.grid), constraints)
    for conflict in result["conflicts"]:
        log(f"row {conflict['row'] + 1}, col {conflict['col'] + 1}: {conflict['reason']}", quiet=args.quiet)
    return result


COMMANDS = {"generate": cmd_generate, "solve": cmd_solve, "validate": cmd_validate}


def build_parser():
    ap = argparse.ArgumentParser(description="Zoo-Tiles puzzle engine demo.")
    ap.add_argument("--config", type=str, default=None, help="YAML config (default configs/engine.yaml)")
    ap.add_argument("--size", type=int, choices=[6, 8, 10, 12], help="Grid size")
    ap.add_argument("--symbols", choices=["animals", "letters", "digits"], help="Symbol alphabet")
    ap.add_argument("--quiet", action="store_true", help="Only print the JSON result")
    sub = ap.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate puzzle(s)")
    g.add_argument("--difficulty", type=str, help="Easy|Medium|Hard|Expert or a fraction 0..1")
    g.add_argument("--seed", type=int, help="Random seed for reproducibility")
    g.add_argument("--unique", action="store_true", default=None, help="Only remove cells that keep a single solution")
    g.add_argument("--count", type=int, default=1, help="Number of puzzles (batch mode when > 1)")
    g.add_argument("--out", type=str, default=None, help="JSONL output file for batch mode")
    g.add_argument("--log_every", type=int, default=50)

    for name in ("solve", "validate"):
        p = sub.add_parser(name, help=f"{name.capitalize()} a grid read from JSON")
        p.add_argument("--grid", required=True, help="JSON file with a list of rows (null = empty)")
    return ap


def _difficulty_arg(value):
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return value


def main(argv=None):
    args = build_parser().parse_args(argv)
    cfg = load_engine_config(
        args.config,
        grid_size=args.size,
        symbols=args.symbols,
        difficulty=_difficulty_arg(getattr(args, "difficulty", None)),
        seed=getattr(args, "seed", None),
        unique=getattr(args, "unique", None),
    )
    try:
        result = COMMANDS[args.command](args, cfg)
    except ZooTilesError as e:
        log(f"error: {e}")
        return 2
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
