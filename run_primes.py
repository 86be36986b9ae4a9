#!/usr/bin/env python3
"""
Command-line front end for the prime engine.

Usage:
    python run_primes.py is-prime 999999999999999989
    python run_primes.py primes-up-to 100
    python run_primes.py factors 360 --config config/custom.yaml
"""

import argparse
import logging
import sys
import time

from prime_engine.config import load_config
from prime_engine.engine import PrimeEngine
from prime_engine.errors import PrimeEngineError

COMMANDS = {
    'is-prime': lambda engine, n: engine.is_prime(n),
    'primes-up-to': lambda engine, n: engine.get_primes_up_to(n),
    'next': lambda engine, n: engine.next_prime(n),
    'previous': lambda engine, n: engine.previous_prime(n),
    'factors': lambda engine, n: engine.prime_factors(n),
    'distinct': lambda engine, n: engine.distinct_prime_factors(n),
    'totient': lambda engine, n: engine.totient(n),
    'divisors': lambda engine, n: engine.divisors(n),
}


def format_result(result) -> str:
    if isinstance(result, list):
        return ' '.join(str(v) for v in result)
    return str(result)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Exact prime queries on unsigned 64-bit integers')
    parser.add_argument('command', choices=sorted(COMMANDS),
                        help='Query to run')
    parser.add_argument('n', type=int,
                        help='Argument of the query')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to config file (defaults built in)')
    parser.add_argument('--timing', action='store_true',
                        help='Print elapsed time and cache size')
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, PrimeEngineError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level_value,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    engine = PrimeEngine.from_config(config)

    start = time.time()
    try:
        result = COMMANDS[args.command](engine, args.n)
    except PrimeEngineError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    elapsed = time.time() - start

    print(format_result(result))
    if args.timing:
        print(f"  Completed in {elapsed:.3f}s")
        print(f"  Cache: {len(engine.cache):,} primes, checked up to {engine.max_checked:,}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
