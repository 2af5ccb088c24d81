#!/usr/bin/env python3
"""
Password Strength Auditor (CLI)

Features
- Heuristic scoring: Shannon and brute-force entropy estimates, character-class coverage
- Common-password lookup against a built-in list plus an optional supplemental wordlist
- Pattern detection: periodic repetition, runs of identical characters, sequential runs
- Batch mode over a file or piped standard input, one report per line
- zxcvbn reference estimate in verbose reports

Usage examples
  python pwaudit.py -p "MyP@ssw0rd"
  echo "password123" | python pwaudit.py
  python pwaudit.py -f passwords.txt -c extra_common.txt -v

Advisory only: the score is a heuristic, not a cryptographic strength proof.
"""
from __future__ import annotations

import argparse
import enum
import io
import json
import logging
import math
import os
import stat
import sys
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Optional, Set, TextIO

from zxcvbn import zxcvbn as _zxcvbn

logger = logging.getLogger(__name__)

# ---------------------------- Constants ---------------------------- #

COMMON_PASSWORDS = frozenset({
    "123456", "password", "123456789", "12345678", "12345",
    "qwerty", "abc123", "football", "111111", "123123",
    "admin", "letmein", "welcome", "monkey", "login",
})

LOWER_BUCKET = 26
UPPER_BUCKET = 26
DIGIT_BUCKET = 10
SYMBOL_BUCKET = 32  # nominal printable-symbol alphabet

MIN_RUN = 4  # identical characters in a row
MIN_SEQUENCE = 4  # code points stepping by +1 or -1

ENTROPY_DIVISOR = 20.0
ENTROPY_CAP = 5.0
WEAK_BELOW = 1.5
MODERATE_BELOW = 4.0

# zxcvbn refuses longer inputs
ZXCVBN_MAX_LENGTH = 72


class Strength(str, enum.Enum):
    WEAK = "WEAK"
    MODERATE = "MODERATE"
    STRONG = "STRONG"


@dataclass(frozen=True)
class Assessment:
    password: str
    length: int
    shannon_entropy: float
    bruteforce_entropy: float
    charset_size: int
    has_upper: bool
    has_lower: bool
    has_digit: bool
    has_symbol: bool
    is_common: bool
    repeated_sequence: bool
    sequential: bool
    only_digits_or_letters: bool
    score: float
    strength: Strength

    def to_dict(self) -> Dict:
        out = asdict(self)
        out['strength'] = self.strength.value
        return out


# ---------------------------- Measurements ---------------------------- #

def char_class(ch: str) -> str:
    """Return 'lower', 'upper', 'digit' or 'symbol' for a single character."""
    if ch.islower():
        return 'lower'
    if ch.isupper():
        return 'upper'
    if ch.isdecimal():
        return 'digit'
    return 'symbol'


def char_classes(password: str) -> Set[str]:
    return {char_class(ch) for ch in password}


def charset_size(password: str) -> int:
    """Coarse alphabet size from the classes present (0..94)."""
    classes = char_classes(password)
    size = 0
    if 'lower' in classes:
        size += LOWER_BUCKET
    if 'upper' in classes:
        size += UPPER_BUCKET
    if 'digit' in classes:
        size += DIGIT_BUCKET
    if 'symbol' in classes:
        size += SYMBOL_BUCKET
    return size


def shannon_entropy(password: str) -> float:
    """Total information estimate: per-character Shannon entropy times length."""
    if not password:
        return 0.0
    length = len(password)
    entropy = 0.0
    for count in Counter(password).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy * length


def bruteforce_entropy(password: str) -> float:
    cs = charset_size(password)
    if cs <= 1:
        return 0.0
    return len(password) * math.log2(cs)


def is_common(password: str, extra_common: Optional[Set[str]] = None) -> bool:
    if password in COMMON_PASSWORDS:
        return True
    return extra_common is not None and password in extra_common


def is_periodic(password: str) -> bool:
    """True for strings made of a shorter prefix repeated, e.g. 'abab', 'aaaa'."""
    n = len(password)
    for sl in range(1, n // 2 + 1):
        if n % sl:
            continue
        if password[:sl] * (n // sl) == password:
            return True
    return False


def has_char_run(password: str, min_run: int = MIN_RUN) -> bool:
    """True when one character appears min_run or more times in a row."""
    count = 0
    prev = None
    for ch in password:
        count = count + 1 if ch == prev else 1
        if count >= min_run:
            return True
        prev = ch
    return False


def has_repeated_sequence(password: str) -> bool:
    return is_periodic(password) or has_char_run(password)


def _has_step_run(codes, step: int, min_seq: int) -> bool:
    count = 1
    for prev, cur in zip(codes, codes[1:]):
        count = count + 1 if cur - prev == step else 1
        if count >= min_seq:
            return True
    return False


def has_sequential_chars(password: str, min_seq: int = MIN_SEQUENCE) -> bool:
    """Detect ascending or descending code-point runs (abcd, 4321)."""
    if len(password) < min_seq:
        return False
    codes = [ord(ch) for ch in password]
    return _has_step_run(codes, 1, min_seq) or _has_step_run(codes, -1, min_seq)


def is_only_digits_or_letters(password: str) -> bool:
    # all() over an empty string is True, so '' counts as single-class
    return all(ch.isdecimal() for ch in password) or all(ch.isalpha() for ch in password)


# ---------------------------- Scoring ---------------------------- #

def round_score(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5), value) / 100


def classify(score: float) -> Strength:
    if score < WEAK_BELOW:
        return Strength.WEAK
    if score < MODERATE_BELOW:
        return Strength.MODERATE
    return Strength.STRONG


def evaluate(password: str, extra_common: Optional[Set[str]] = None) -> Assessment:
    """Score a single password. Never raises; '' yields a zeroed WEAK assessment."""
    pw = password.strip()
    classes = char_classes(pw)
    has_upper = 'upper' in classes
    has_lower = 'lower' in classes
    has_digit = 'digit' in classes
    has_symbol = 'symbol' in classes
    bf_entropy = bruteforce_entropy(pw)
    common = is_common(pw, extra_common)
    repeated = has_repeated_sequence(pw)
    sequential = has_sequential_chars(pw)
    single_class = is_only_digits_or_letters(pw)

    score = min(bf_entropy / ENTROPY_DIVISOR, ENTROPY_CAP)
    if has_upper and has_lower:
        score += 1.0
    if has_digit:
        score += 1.0
    if has_symbol:
        score += 1.0
    if common:
        score -= 5.0
    if repeated:
        score -= 2.0
    if sequential:
        score -= 2.0
    if single_class:
        score -= 0.5
    score = round_score(score)

    return Assessment(
        password=pw,
        length=len(pw),
        shannon_entropy=shannon_entropy(pw),
        bruteforce_entropy=bf_entropy,
        charset_size=charset_size(pw),
        has_upper=has_upper,
        has_lower=has_lower,
        has_digit=has_digit,
        has_symbol=has_symbol,
        is_common=common,
        repeated_sequence=repeated,
        sequential=sequential,
        only_digits_or_letters=single_class,
        score=score,
        strength=classify(score),
    )


def reference_estimate(password: str) -> Optional[Dict]:
    """zxcvbn cross-check for verbose reports; None when zxcvbn can't take the input."""
    pw = password.strip()
    if not pw or len(pw) > ZXCVBN_MAX_LENGTH:
        return None
    res = _zxcvbn(pw)
    crack_times = res.get('crack_times_display') or {}
    return {
        'score': res.get('score'),
        'guesses': res.get('guesses'),
        'crack_time': crack_times.get('offline_slow_hashing_1e4_per_second'),
    }


# ---------------------------- Input / output ---------------------------- #

def load_common_file(path: str) -> Set[str]:
    """Read a supplemental common-password list. Failures are logged, not raised."""
    out: Set[str] = set()
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            for line in f:
                w = line.strip()
                if w:
                    out.add(w)
    except OSError as exc:
        logger.warning("could not load common password file %s: %s", path, exc)
    return out


def iter_passwords(stream: TextIO) -> Iterator[str]:
    """Yield each non-blank line of a text stream, without its line ending."""
    for line in stream:
        pw = line.rstrip('\r\n')
        if pw.strip():
            yield pw


def format_report(a: Assessment, verbose: bool = False, reference: Optional[Dict] = None) -> str:
    lines = [
        'Password audit result',
        '---------------------',
        f"Length         : {a.length}",
        f"Strength       : {a.strength.value} (score: {a.score:.2f})",
        f"Shannon entropy: {a.shannon_entropy:.2f} bits",
        f"Brute-force est: {a.bruteforce_entropy:.2f} bits",
        f"Charset size   : {a.charset_size}",
    ]
    if verbose:
        lines.append(f"Classes        : upper={a.has_upper}, lower={a.has_lower}, "
                     f"digit={a.has_digit}, symbol={a.has_symbol}")
        lines.append(f"Common password: {a.is_common}")
        lines.append(f"Patterns       : repeated={a.repeated_sequence}, sequential={a.sequential}, "
                     f"only digits/letters={a.only_digits_or_letters}")
        if reference:
            lines.append(f"zxcvbn (0-4)   : {reference['score']}")
            lines.append(f"Est. guesses   : {reference['guesses']}")
            if reference['crack_time']:
                lines.append(f"Crack time     : {reference['crack_time']} (offline, slow hash)")
    return '\n'.join(lines)


def format_json(a: Assessment) -> str:
    return json.dumps(a.to_dict(), ensure_ascii=False)


# ---------------------------- CLI ---------------------------- #

USAGE_EXAMPLES = """Usage examples:
  pwaudit -p "MyP@ssw0rd"
  echo "password123" | pwaudit
  pwaudit -f passwords.txt -v
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='pwaudit',
        description='Offline heuristic password strength auditor',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    p.add_argument('--password', '-p', help='Password to analyze, evaluated even when empty (-p ""). Without it, -f or piped stdin is used')
    p.add_argument('--file', '-f', help='File with one password per line')
    p.add_argument('--common', '-c', help='Supplemental common-password list (one per line)')
    p.add_argument('--verbose', '-v', action='store_true', help='Show class and pattern flags and the zxcvbn estimate')
    p.add_argument('--json', action='store_true', help='Emit one JSON object per password instead of text reports')
    return p


class _Reporter:
    """Prints assessments in input order, blank line between text reports."""

    def __init__(self, verbose: bool, as_json: bool, out: TextIO):
        self.verbose = verbose
        self.as_json = as_json
        self.out = out
        self.count = 0

    def emit(self, a: Assessment):
        if self.as_json:
            print(format_json(a), file=self.out)
        else:
            if self.count:
                print(file=self.out)
            reference = reference_estimate(a.password) if self.verbose else None
            print(format_report(a, self.verbose, reference), file=self.out)
        self.count += 1


def _stdin_is_piped(stdin: Optional[TextIO]) -> bool:
    """True for a pipe or regular file; terminals and /dev/null are character devices."""
    if stdin is None:
        return False
    try:
        mode = os.fstat(stdin.fileno()).st_mode
    except (OSError, ValueError):
        # in-memory streams have no descriptor
        return not stdin.isatty()
    return not stat.S_ISCHR(mode)


def _report_stream(stream: TextIO, source: str, extra_common, reporter: _Reporter) -> int:
    """Evaluate each line of stream. Read errors are fatal, write errors propagate."""
    lines = iter_passwords(stream)
    while True:
        try:
            pw = next(lines)
        except StopIteration:
            return 0
        except OSError as exc:
            logger.error("could not read %s: %s", source, exc)
            return 1
        reporter.emit(evaluate(pw, extra_common))


def run(args: argparse.Namespace, parser: argparse.ArgumentParser, stdin: Optional[TextIO], out: TextIO) -> int:
    extra_common = load_common_file(args.common) if args.common else None
    reporter = _Reporter(args.verbose, args.json, out)

    # an explicit empty -p is still a password to evaluate
    if args.password is not None:
        reporter.emit(evaluate(args.password, extra_common))
        return 0

    if args.file:
        try:
            f = open(args.file, 'r', encoding='utf-8', errors='replace')
        except OSError as exc:
            logger.error("could not read password file %s: %s", args.file, exc)
            return 1
        with f:
            return _report_stream(f, "password file %s" % args.file, extra_common, reporter)

    if _stdin_is_piped(stdin):
        if isinstance(stdin, io.TextIOWrapper):
            stdin.reconfigure(errors='replace')
        return _report_stream(stdin, "stdin", extra_common, reporter)

    print(USAGE_EXAMPLES, file=out)
    parser.print_help(file=out)
    return 0


def main(argv=None) -> int:
    logging.basicConfig(level=logging.WARNING, format='[!] %(message)s', stream=sys.stderr)
    parser = build_parser()
    args = parser.parse_args(argv)
    return run(args, parser, sys.stdin, sys.stdout)


def cli():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print('\nInterrupted by user.', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    cli()
