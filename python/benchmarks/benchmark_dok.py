import argparse
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

from sparsemat import SparseMatrix, add, multiply, subtract

# ---------- Builders ----------


def build_scipy_coo(m: int, n: int, density: float, seed: int) -> Tuple[sp.coo_matrix, int]:
    rs = np.random.RandomState(seed)
    A_coo = sp.random(m, n, density=density, format="coo", random_state=rs, data_rvs=rs.standard_normal)
    return A_coo, int(A_coo.nnz)


def build_dok_from_scipy(A_scipy: sp.spmatrix) -> SparseMatrix:
    coo = A_scipy.tocoo()
    return SparseMatrix.from_triples(
        zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist()), coo.shape
    )


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float]) -> Optional[Dict[str, float]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
    }


def validate(name: str, C: SparseMatrix, C_ref: sp.spmatrix) -> None:
    if not np.allclose(C.toarray(), C_ref.toarray(), rtol=1e-7, atol=1e-9):
        raise AssertionError(f"Validation failed: sparsemat {name} vs scipy")


# ---------- Main ----------


def main():
    p = argparse.ArgumentParser(description="Dictionary-of-keys benchmarks against scipy.sparse")
    p.add_argument("--m", type=int, default=500)
    p.add_argument("--n", type=int, default=500)
    p.add_argument("--k", type=int, default=500, help="Columns of the right operand for multiply")
    p.add_argument("--density", type=float, default=0.01)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--validate", action="store_true")
    p.add_argument(
        "--ops",
        type=str,
        default="all",
        help="Comma-separated ops: add, sub, matmul_probe, matmul_rows",
    )
    args = p.parse_args()

    A_scipy, nnzA = build_scipy_coo(args.m, args.n, args.density, args.seed)
    B_scipy, nnzB = build_scipy_coo(args.m, args.n, args.density, args.seed + 101)
    R_scipy, nnzR = build_scipy_coo(args.n, args.k, args.density, args.seed + 202)
    A = build_dok_from_scipy(A_scipy)
    B = build_dok_from_scipy(B_scipy)
    R = build_dok_from_scipy(R_scipy)
    A_csr, B_csr, R_csr = A_scipy.tocsr(), B_scipy.tocsr(), R_scipy.tocsr()

    wanted = {op.strip().lower() for op in (args.ops.split(",") if args.ops else [])}
    if "all" in wanted or not wanted:
        wanted = {"add", "sub", "matmul_probe", "matmul_rows"}

    results: List[Dict[str, float]] = []

    cases = [
        ("add", lambda: add(A, B), lambda: A_csr + B_csr),
        ("sub", lambda: subtract(A, B), lambda: A_csr - B_csr),
        ("matmul_probe", lambda: multiply(A, R, method="probe"), lambda: A_csr @ R_csr),
        ("matmul_rows", lambda: multiply(A, R, method="rows"), lambda: A_csr @ R_csr),
    ]
    for name, run_dok, run_scipy in cases:
        if name not in wanted:
            continue
        if not args.no_scipy:
            stats = summarize("scipy:" + name, time_op(run_scipy, args.warmup, args.repeat))
            if stats:
                results.append(stats)
        stats = summarize("sparsemat:" + name, time_op(run_dok, args.warmup, args.repeat))
        if stats:
            results.append(stats)
        if args.validate:
            validate(name, run_dok(), run_scipy())

    # ---- print summary ----
    print(
        f"DOK Benchmarks: m={args.m} n={args.n} k={args.k} density={args.density} "
        f"nnz=({nnzA}, {nnzB}, {nnzR})"
    )
    for r in results:
        print(
            f"{r['name']:>24}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms"
        )


if __name__ == "__main__":
    main()
