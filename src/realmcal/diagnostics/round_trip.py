from __future__ import annotations

import argparse
import random
from typing import List, Optional

import realmcal


def parse_calendars(s: str) -> List[str]:
    # "harptos,gregorian" -> ["harptos", "gregorian"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    lo: int,
    hi: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """
    Samples N absolute days in [lo, hi] and checks
      get_absolute_day(get_date(d)) == d
    plus day-of-year continuity between d and d + 1.
    """
    random.seed(seed)
    drv = realmcal.get_driver(calendar)
    failures = 0

    for _ in range(N):
        d0 = random.randint(lo, hi)
        t = drv.get_date(d0)
        back = drv.get_absolute_day_for(t)
        if back != d0:
            failures += 1
            print("\nFAIL (round trip)")
            print("calendar:", calendar)
            print("d0:", d0)
            print("date:", t)
            print("back:", back)
            if failures >= max_failures:
                return failures

        t1 = drv.get_date(d0 + 1)
        if not t.is_simple_counter:
            same_year = t1.year == t.year and t1.day_of_year == t.day_of_year + 1
            new_year = t1.year == t.year + 1 and t1.day_of_year == 0
            if not (same_year or new_year):
                failures += 1
                print("\nFAIL (continuity)")
                print("calendar:", calendar)
                print("d0:", d0, t)
                print("d0+1:", t1)
                if failures >= max_failures:
                    return failures

    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip check: day -> date -> day.")
    p.add_argument("--calendars", default=",".join(realmcal.list_calendars()))
    p.add_argument("--n", type=int, default=2000)
    p.add_argument("--min-day", type=int, default=-1_000_000)
    p.add_argument("--max-day", type=int, default=1_000_000)
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--max-failures", type=int, default=10)
    args = p.parse_args(argv)

    total = 0
    for cal in parse_calendars(args.calendars):
        f = roundtrip_test(cal, args.n, args.min_day, args.max_day, args.seed, max_failures=args.max_failures)
        print(f"{cal:16s} N={args.n}  failures={f}")
        total += f

    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
