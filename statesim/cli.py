import argparse, logging

from . import rng
from .errors import StateSimError
from .qaoa import QAOAParams, run_qaoa
from .qec import ErrorKind, RepetitionCode
from .runtime import StateVector
from .sampler import sample_counts
from .stats import born_rule_chisquare

def _run_qaoa(args):
    params = QAOAParams(args.qubits, args.depth, args.gamma, args.beta)
    res = run_qaoa(params, args.shots)
    for bits, c in sorted(res.counts.items()):
        print(f"{bits}: {c}")
    print(f"mean cost: {res.mean_cost:.4f} (exact {res.exact_cost:.4f})")
    print(f"best: {res.best_bitstring} cost={res.best_cost}")

def _run_qec(args):
    kind = ErrorKind(args.kind)
    code = RepetitionCode()
    recovered = 0
    for r in range(args.rounds):
        rep = code.run_cycle(kind, args.qubit)
        print(f"-- round {r} --")
        for line in rep.log:
            print(line)
        if args.dump:
            for line in code.sv.dump():
                print(line)
        recovered += rep.recovered
    print(f"recovered {recovered}/{args.rounds}")

def _run_check(args):
    sv = StateVector(args.qubits)
    for q in range(sv.n):
        sv.h(q)
    res = born_rule_chisquare(sv, sample_counts(sv, args.shots), args.alpha)
    print(f"{res.test_name}: {'PASS' if res.passed else 'FAIL'} "
          f"chi2={res.statistic:.3f} p={res.p_value:.4f} ({res.detail})")

def main(argv=None):
    ap = argparse.ArgumentParser(prog="statesim")
    ap.add_argument("--seed", type=int, default=None, help="Seed the shared random source")
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_q = sub.add_parser("qaoa", help="Sample the single-edge Max-Cut QAOA ansatz")
    ap_q.add_argument("--qubits", type=int, default=2)
    ap_q.add_argument("--depth", type=int, default=1)
    ap_q.add_argument("--gamma", type=float, default=0.5)
    ap_q.add_argument("--beta", type=float, default=0.5, help="Accepted, unused by the bit-flip mixer")
    ap_q.add_argument("--shots", type=int, default=1024)

    ap_e = sub.add_parser("qec", help="Run 3-qubit repetition-code cycles")
    ap_e.add_argument("--kind", choices=[k.value for k in ErrorKind], default="bit")
    ap_e.add_argument("--rounds", type=int, default=1)
    ap_e.add_argument("--qubit", type=int, default=None, help="Fault this qubit instead of a random one")
    ap_e.add_argument("--dump", action="store_true", help="Print amplitudes after each round")

    ap_c = sub.add_parser("check", help="Chi-squared Born-rule check on the uniform superposition")
    ap_c.add_argument("--qubits", type=int, default=2)
    ap_c.add_argument("--shots", type=int, default=10000)
    ap_c.add_argument("--alpha", type=float, default=0.001)

    args = ap.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")
    rng.seed(args.seed)

    try:
        if args.cmd == "qaoa": _run_qaoa(args)
        elif args.cmd == "qec": _run_qec(args)
        elif args.cmd == "check": _run_check(args)
    except StateSimError as e:
        ap.error(str(e))

if __name__ == "__main__":
    main()
