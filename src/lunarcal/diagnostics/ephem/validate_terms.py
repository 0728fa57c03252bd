#!/usr/bin/env python3
"""
Compare solar-term instants and civil days against a JPL ephemeris.

The VSOP87 solar longitude is good to about one arcsecond, i.e. under half
a minute in term timing; only terms that fall close to local midnight can land
on a different civil day.
"""
from __future__ import annotations

import argparse
import math
from typing import List, Optional

from lunarcal.ephemeris import DEFAULT_KERNEL, load_ephemeris
from lunarcal.reference import solar
from lunarcal.reference.time_scales import civil_offset_hours
from lunarcal.tables.names import TERM_NAMES


def ephemeris_terms(ts, eph, year: int):
    """(index, JD TT, civil JDN) of the 24 terms of `year` from the ephemeris."""
    from skyfield.framelib import ecliptic_frame
    from skyfield.searchlib import find_discrete

    earth, sun = eph["earth"], eph["sun"]

    def sector_at(t):
        _, lon, _ = earth.at(t).observe(sun).apparent().frame_latlon(ecliptic_frame)
        return (lon.degrees // 15.0).astype(int)

    sector_at.step_days = 5.0

    t0 = ts.tt_jd(solar.solar_term_jde(year, 0) - 2.0)
    t1 = ts.tt_jd(solar.solar_term_jde(year, solar.TERMS_PER_YEAR - 1) + 2.0)
    times, sectors = find_discrete(t0, t1, sector_at)

    out = []
    for t, sector in zip(times, sectors):
        lon = 15.0 * int(sector)
        idx = int(round((lon - solar.FIRST_TERM_LONGITUDE) / 15.0)) % solar.TERMS_PER_YEAR
        jd_ut = float(t.ut1)
        jdn = int(math.floor(jd_ut + civil_offset_hours(jd_ut) / 24.0 + 0.5))
        out.append((idx, float(t.tt), jdn))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Validate solar-term days against a JPL ephemeris (skyfield).")
    p.add_argument("--year-start", type=int, default=1950)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--kernel", default=DEFAULT_KERNEL, help=f"JPL kernel (default: {DEFAULT_KERNEL})")
    args = p.parse_args(argv)

    if args.year_end < args.year_start:
        raise SystemExit("--year-end must be >= --year-start")

    print(f"Loading {args.kernel}...")
    ts, eph = load_ephemeris(args.kernel)

    n = 0
    worst = 0.0
    mismatches = []
    for year in range(args.year_start, args.year_end + 1):
        ours = solar.solar_term_jdns(year)
        for idx, jd_tt, jdn in ephemeris_terms(ts, eph, year):
            n += 1
            dt_min = (solar.solar_term_jde(year, idx) - jd_tt) * 1440.0
            worst = max(worst, abs(dt_min))
            if ours[idx] != jdn:
                mismatches.append((year, idx, ours[idx] - jdn, dt_min))

    print(f"Checked {n} terms from {args.year_start} to {args.year_end}")
    print(f"Largest instant difference: {worst:.2f} min")
    print(f"Civil-day mismatches: {len(mismatches)}")
    for year, idx, dd, dt_min in mismatches:
        print(f"  {year} {TERM_NAMES[idx]}  day {dd:+d}  ({dt_min:+.2f} min)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
