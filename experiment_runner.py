"""
CLI to run shortest-path experiments across multiple seeds and graph modes.

Reads experiments/experiments.yml, builds random graphs, runs the indexed
Dijkstra engine from node 0, cross-checks it against the heapq baseline and
produces per-run and aggregated metrics.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Set, Tuple
import csv
from concurrent.futures import ProcessPoolExecutor, as_completed
import math
import time

from dijkstra_engine import UNREACHED, DijkstraEngine, baseline_distances
from topology_builder import build_random_graph


SOURCE_NODE = 0

RUN_FIELDS = [
    "experiment",
    "mode",
    "seed",
    "nodes",
    "edges",
    "reachable",
    "max_distance",
    "avg_distance",
    "avg_hops",
    "matches_baseline",
    "duration_sec",
]

AGGREGATE_FIELDS = [
    "experiment",
    "mode",
    "nodes",
    "runs",
    "avg_reachable",
    "avg_distance",
    "avg_hops",
    "baseline_mismatches",
    "avg_duration_sec",
]


class GraphMode(Enum):
    DIRECTED = "directed"
    UNDIRECTED = "undirected"


@dataclass(frozen=True)
class ExperimentConfig:
    name: str
    nodes: int
    degree: int
    max_weight: float


@dataclass(frozen=True)
class Config:
    seed: int
    seed_count: int
    modes: Sequence[str]
    experiments: Sequence[ExperimentConfig]


def load_config(path: Path) -> Config:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text())
    experiments = [
        ExperimentConfig(
            name=exp["name"],
            nodes=int(exp["nodes"]),
            degree=int(exp["degree"]),
            max_weight=float(exp.get("max_weight", 10.0)),
        )
        for exp in data["experiments"]
    ]
    modes = [GraphMode[str(m).upper()].value for m in data["modes"]]
    return Config(
        seed=int(data["seed"]),
        seed_count=int(data["seed_count"]),
        modes=modes,
        experiments=experiments,
    )


def run_experiments(
    config_path: Path,
    runs_csv: Path | None = None,
    aggregates_csv: Path | None = None,
    max_workers: int | None = None,
    use_processes: bool = True,
) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    existing_runs = load_runs_csv(runs_csv) if runs_csv else []
    seen_keys: Set[Tuple[str, str, int]] = {
        (str(r.get("experiment")), str(r.get("mode")), int(r.get("seed"))) for r in existing_runs
    }

    tasks: List[tuple[ExperimentConfig, GraphMode, int]] = []
    for exp in cfg.experiments:
        for mode_value in cfg.modes:
            mode = GraphMode(mode_value)
            for offset in range(cfg.seed_count):
                seed = cfg.seed + offset
                key = (exp.name, mode.value, seed)
                if key in seen_keys:
                    continue
                tasks.append((exp, mode, seed))

    print(f"[run] queued {len(tasks)} new tasks (existing runs: {len(seen_keys)})")

    new_results: List[Dict[str, object]] = []
    if tasks:
        if use_processes:
            try:
                with ProcessPoolExecutor(max_workers=max_workers) as executor:
                    future_to_task = {
                        executor.submit(_run_task, asdict(exp), mode.value, seed): (exp.name, mode.value, seed)
                        for exp, mode, seed in tasks
                    }
                    for future in as_completed(future_to_task):
                        exp_name, mode_val, seed = future_to_task[future]
                        try:
                            res = future.result()
                            new_results.append(res)
                            if runs_csv:
                                append_run_row(runs_csv, res)
                            print(f"[run] completed experiment={exp_name} mode={mode_val} seed={seed} duration={res['duration_sec']:.4f}s")
                        except Exception as exc:
                            print(f"[run] failed experiment={exp_name} mode={mode_val} seed={seed}: {exc}")
            except (PermissionError, NotImplementedError, OSError) as exc:
                print(f"[run] process pool unavailable ({exc}), falling back to sequential execution")
                use_processes = False
        else:
            print("[run] using sequential execution")

        if not use_processes:
            for exp, mode, seed in tasks:
                res = _run_task(asdict(exp), mode.value, seed)
                new_results.append(res)
                if runs_csv:
                    append_run_row(runs_csv, res)
                print(f"[run] completed experiment={exp.name} mode={mode.value} seed={seed} duration={res['duration_sec']:.4f}s")

    results = existing_runs + new_results

    if aggregates_csv:
        write_aggregates_csv(aggregate_by_mode(results), aggregates_csv)

    elapsed = time.time() - start
    print(f"[run] completed {len(results)} total runs in {elapsed:.2f}s")
    return results


def aggregate_by_mode(results: Iterable[Dict[str, object]]) -> List[Dict[str, float]]:
    """
    Aggregate metrics per (experiment, mode), averaging only across seeds.
    """
    accum: Dict[tuple[str, str], Dict[str, float]] = {}
    counts: Dict[tuple[str, str], int] = {}
    meta: Dict[tuple[str, str], Dict[str, object]] = {}

    for res in results:
        exp = str(res["experiment"])
        mode = str(res["mode"])
        key = (exp, mode)

        metrics = res.get("metrics")
        if metrics is None:
            # Resume path: metrics are flattened at the top level in runs.csv.
            metrics = {name: res.get(name, 0.0) for name in RUN_FIELDS}

        counts[key] = counts.get(key, 0) + 1
        bucket = accum.setdefault(
            key,
            {"reachable_sum": 0.0, "distance_sum": 0.0, "hops_sum": 0.0, "mismatches": 0.0, "duration_sum": 0.0},
        )
        bucket["reachable_sum"] += float(metrics.get("reachable", 0.0))
        bucket["distance_sum"] += float(metrics.get("avg_distance", 0.0))
        bucket["hops_sum"] += float(metrics.get("avg_hops", 0.0))
        if not _as_bool(metrics.get("matches_baseline", True)):
            bucket["mismatches"] += 1
        bucket["duration_sum"] += float(res.get("duration_sec", 0.0))

        meta[key] = {
            "experiment": exp,
            "mode": mode,
            "nodes": int(metrics.get("nodes", 0) or 0),
        }

    aggregated_rows: List[Dict[str, float]] = []
    for key, sums in accum.items():
        n = counts[key]
        info = meta[key]
        aggregated_rows.append(
            {
                "experiment": info["experiment"],
                "mode": info["mode"],
                "nodes": info["nodes"],
                "runs": float(n),
                "avg_reachable": sums["reachable_sum"] / n if n else 0.0,
                "avg_distance": sums["distance_sum"] / n if n else 0.0,
                "avg_hops": sums["hops_sum"] / n if n else 0.0,
                "baseline_mismatches": sums["mismatches"],
                "avg_duration_sec": sums["duration_sum"] / n if n else 0.0,
            }
        )

    return aggregated_rows


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _run_task(exp_dict: Dict[str, object], mode_value: str, seed: int) -> Dict[str, object]:
    start_run = time.time()
    exp = ExperimentConfig(
        name=str(exp_dict["name"]),
        nodes=int(exp_dict["nodes"]),
        degree=int(exp_dict["degree"]),
        max_weight=float(exp_dict["max_weight"]),
    )
    mode = GraphMode(mode_value)
    res = _run_single(exp, mode, seed)
    res["duration_sec"] = time.time() - start_run
    return res


def load_runs_csv(path: Path | None) -> List[Dict[str, object]]:
    if path is None or not path.exists():
        return []
    with path.open() as f:
        reader = csv.DictReader(f)
        rows: List[Dict[str, object]] = []
        for row in reader:
            # Normalize numeric fields so aggregation works on resumed runs.
            row["seed"] = int(row.get("seed", 0))
            for key in ("nodes", "edges", "reachable"):
                if key in row and row[key] != "":
                    row[key] = int(row[key])
            for key in ("max_distance", "avg_distance", "avg_hops", "duration_sec"):
                if key in row and row[key] != "":
                    row[key] = float(row[key])
            if "matches_baseline" in row:
                row["matches_baseline"] = _as_bool(row["matches_baseline"])
            rows.append(row)
        return rows


def _run_row(res: Mapping[str, object]) -> Dict[str, object]:
    metrics = res.get("metrics", {})
    row = {name: metrics.get(name) for name in RUN_FIELDS}
    row["experiment"] = res.get("experiment")
    row["mode"] = res.get("mode")
    row["seed"] = res.get("seed")
    row["duration_sec"] = res.get("duration_sec", 0.0)
    return row


def append_run_row(path: Path, res: Dict[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RUN_FIELDS)
        if write_header:
            writer.writeheader()
        writer.writerow(_run_row(res))


def _run_single(exp: ExperimentConfig, mode: GraphMode, seed: int) -> Dict[str, object]:
    directed = mode == GraphMode.DIRECTED
    graph = build_random_graph(
        nodes=exp.nodes,
        degree=exp.degree,
        max_weight=exp.max_weight,
        seed=seed,
        directed=directed,
    )

    engine = DijkstraEngine(graph, SOURCE_NODE, directed=directed)
    reached = {node: d for node, d in engine.distances().items() if d is not UNREACHED}
    hop_counts = [len(engine.shortest_path_to(node)) - 1 for node in reached]

    metrics = {
        "nodes": exp.nodes,
        "edges": graph.edge_count(),
        "reachable": len(reached),
        "max_distance": max(reached.values()) if reached else 0.0,
        "avg_distance": sum(reached.values()) / len(reached) if reached else 0.0,
        "avg_hops": sum(hop_counts) / len(hop_counts) if hop_counts else 0.0,
        "matches_baseline": _matches(reached, baseline_distances(graph, SOURCE_NODE)),
    }
    return {
        "experiment": exp.name,
        "mode": mode.value,
        "seed": seed,
        "metrics": metrics,
    }


def _matches(costs: Mapping[object, float], expected: Mapping[object, float]) -> bool:
    if costs.keys() != expected.keys():
        return False
    return all(math.isclose(costs[node], expected[node], abs_tol=1e-9) for node in costs)


def write_results_csv(results: Iterable[Dict[str, object]], path: Path) -> None:
    """
    Write per-run results to CSV for downstream analysis.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RUN_FIELDS)
        writer.writeheader()
        for res in results:
            writer.writerow(_run_row(res))


def write_aggregates_csv(aggregated: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write aggregated metrics by mode to CSV.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=AGGREGATE_FIELDS)
        writer.writeheader()
        for row in aggregated:
            writer.writerow({name: row.get(name, "" if name in ("experiment", "mode") else 0.0) for name in AGGREGATE_FIELDS})


def main() -> None:
    config_path = Path(__file__).parent / "experiments" / "experiments.yml"
    out_dir = Path(__file__).parent / "experiments" / "results"
    runs_csv = out_dir / "runs.csv"
    aggregates_csv = out_dir / "aggregates.csv"

    results = run_experiments(config_path, runs_csv=runs_csv, aggregates_csv=aggregates_csv)
    for res in results:
        print(res)
    print("Aggregated by mode:", aggregate_by_mode(results))
    print(f"Wrote runs to {runs_csv} and aggregates to {aggregates_csv}")


if __name__ == "__main__":
    main()
