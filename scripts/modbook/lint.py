"""
Exercise source linter.

Scans the markdown source of every exercise in a Book for problems that
would surface in the rendered output: unknown placeholders, malformed
headings, whitespace issues, and sections whose tags collide.

Can be invoked from the build.py CLI before a render.
"""

import os
import re

from modbook.render import section_file_name


# ── Lint Patterns ──────────────────────────────────────────────────────
#
# Each: (description, compiled regex, replacement, severity)
#   replacement = None → report only (manual review)
#   replacement = str  → auto-fixable with --fix
#   severity: "error" | "warning" | "info"

KNOWN_PLACEHOLDERS = {"exercise_dir", "exercise_ref"}

PLACEHOLDER = re.compile(r"#\[modmod:([^\]]*)\]")

WHITESPACE_PATTERNS = [
    ("Carriage return (Windows line ending)",
     re.compile(r"\r"), "", "warning"),
    ("Trailing whitespace",
     re.compile(r"[ \t]+(?=\r?$)", re.MULTILINE), "", "warning"),
]

STRUCTURE_PATTERNS = [
    ("Missing space after heading hash",
     re.compile(r"^(#{1,6})[^ #\n\[]", re.MULTILINE), None, "warning"),
    ("Level 2+ heading (only level 1 headings are nested under the exercise)",
     re.compile(r"^#{2,6} ", re.MULTILINE), None, "info"),
]

ALL_PATTERNS = WHITESPACE_PATTERNS + STRUCTURE_PATTERNS


# ── Severity display ───────────────────────────────────────────────────

SEVERITY_COLOR = {
    "error":   "\033[31m✗\033[0m",
    "warning": "\033[33m!\033[0m",
    "info":    "\033[36m·\033[0m",
}

SEVERITY_PLAIN = {
    "error":   "[ERROR]",
    "warning": "[WARN]",
    "info":    "[INFO]",
}


# ── Linter class ───────────────────────────────────────────────────────


class Linter:
    """
    Exercise linter.

    Usage:
        linter = Linter(book, fix=False, color=True)
        success = linter.run()
    """

    def __init__(self, book, fix=False, verbose=False, color=True):
        self.book = book
        self.fix = fix
        self.verbose = verbose
        self.symbols = SEVERITY_COLOR if color else SEVERITY_PLAIN
        self.total_counts = {"error": 0, "warning": 0, "info": 0}
        self.total_fixes = 0
        self.files_with_issues = 0

    @property
    def files(self):
        """Exercise source files in render order, without repeats."""
        files = []
        seen = set()
        for _, _, section in self.book.numbered_sections():
            for subsection in section.subsections:
                if subsection.content not in seen:
                    seen.add(subsection.content)
                    files.append(subsection.content)
        return files

    def run(self):
        """Lint the book. Returns True if no errors found."""
        for message in self._check_tags():
            self.total_counts["error"] += 1
            print(f"  {self.symbols['error']} {message}")

        files = self.files
        for filepath in files:
            findings, fixes, counts = self._lint_file(filepath)
            self.total_fixes += fixes

            for sev in self.total_counts:
                self.total_counts[sev] += counts[sev]

            if findings:
                self.files_with_issues += 1
                print(f"  {filepath}")
                for f in findings:
                    print(f)
                print()
            elif self.verbose:
                print(f"  {filepath} — clean")

        self._summary(len(files))
        return self.total_counts["error"] == 0

    def _check_tags(self):
        """Report sections that would render to the same file."""
        messages = []
        seen = {}
        for chapter_i, section_i, section in self.book.numbered_sections():
            name = section_file_name(section)
            if name in seen:
                messages.append(
                    f"Unit {chapter_i}.{section_i} '{section.title}' renders to "
                    f"{name}, already used by Unit {seen[name]}"
                )
            else:
                seen[name] = f"{chapter_i}.{section_i} '{section.title}'"
        return messages

    def _lint_file(self, filepath):
        """Scan a single file. Returns (findings, fix_count, severity_counts)."""
        findings = []
        fixes_applied = 0
        counts = {"error": 0, "warning": 0, "info": 0}

        if not os.path.isfile(filepath):
            return (
                [f"  {self.symbols['error']} File not found"],
                0,
                {"error": 1, "warning": 0, "info": 0},
            )

        try:
            with open(filepath, "r", encoding="utf-8", newline="") as f:
                content = f.read()
            original = content
        except UnicodeDecodeError:
            return (
                [f"  {self.symbols['error']} Cannot read (encoding error)"],
                0,
                {"error": 1, "warning": 0, "info": 0},
            )
        except OSError as e:
            return (
                [f"  {self.symbols['error']} Cannot read ({e.strerror or e})"],
                0,
                {"error": 1, "warning": 0, "info": 0},
            )

        # ── Regex patterns ─────────────────────────────────
        for description, pattern, replacement, severity in ALL_PATTERNS:
            matches = list(pattern.finditer(content))
            if not matches:
                continue

            for match in matches:
                line_num = content[: match.start()].count("\n") + 1
                counts[severity] += 1

                if replacement is not None and self.fix:
                    findings.append(
                        f"  {self.symbols[severity]} :{line_num} Fixed: {description}"
                    )
                else:
                    label = "Found" if replacement is None else "Fixable"
                    findings.append(
                        f"  {self.symbols[severity]} :{line_num} {label}: {description}"
                    )

            if self.fix and replacement is not None:
                new = pattern.sub(replacement, content)
                if new != content:
                    fixes_applied += len(matches)
                    content = new

        # ── Placeholders ───────────────────────────────────
        for match in PLACEHOLDER.finditer(content):
            if match.group(1) in KNOWN_PLACEHOLDERS:
                continue
            line_num = content[: match.start()].count("\n") + 1
            counts["error"] += 1
            findings.append(
                f"  {self.symbols['error']} :{line_num} Unknown placeholder "
                f"'{match.group(0)}' (left in output verbatim)"
            )

        # ── Write back ─────────────────────────────────────
        if self.fix and content != original:
            with open(filepath, "w", encoding="utf-8", newline="") as f:
                f.write(content)

        return findings, fixes_applied, counts

    def _summary(self, file_count):
        """Print the summary line."""
        total = sum(self.total_counts.values())

        print(f"{'─' * 50}")

        if total == 0:
            print(f"  No issues found across {file_count} files.")
            return

        parts = []
        if self.total_counts["error"]:
            parts.append(f"{self.total_counts['error']} errors")
        if self.total_counts["warning"]:
            parts.append(f"{self.total_counts['warning']} warnings")
        if self.total_counts["info"]:
            parts.append(f"{self.total_counts['info']} info")

        print(f"  {', '.join(parts)} across {self.files_with_issues}/{file_count} files")

        if self.fix:
            print(f"  Applied {self.total_fixes} fixes")
            remaining = total - self.total_fixes
            if remaining > 0:
                print(f"  {remaining} issues require manual review")

        if not self.fix and (self.total_counts["error"] or self.total_counts["warning"]):
            print("  Run with --fix to auto-correct fixable issues")
