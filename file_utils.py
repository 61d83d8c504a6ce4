# file_utils.py
#
# Purpose:
# This file handles saving a PortfolioScore to disk in a few formats:
#   1) TXT report (easy for a human to read)
#   2) JSON document (the full score, for other tools to read later)
#   3) CSV dimension rows (easy to open in Excel/Sheets)
# It also loads a list of snapshot file paths from a text file.
#
# Saving is kept out of engine.py so the scoring pipeline stays free of I/O.

import os                      # File paths + existence checks
import csv                     # Write CSV files (built-in)
import json                    # Write JSON files (built-in)
from datetime import datetime  # Timestamp for filenames

REPORTS_DIR = "reports"        # Folder to store all outputs

DIMENSION_FIELDS = ["username", "dimension", "score", "weight", "weighted_points", "feedback"]


def ensure_reports_dir(reports_dir=REPORTS_DIR):
    """
    Create the reports folder if it doesn't exist.
    exist_ok=True means an existing folder is left alone.
    """
    os.makedirs(reports_dir, exist_ok=True)


def _timestamp():
    """
    Return a timestamp string for filenames.

    Example: 20260228_014512
    Timestamps keep exports from overwriting previous runs.
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def save_report(username, score, reports_dir=REPORTS_DIR):
    """
    Save a human-readable TXT report.
    Returns the saved file path.
    """
    ensure_reports_dir(reports_dir)

    ts = _timestamp()
    path = os.path.join(reports_dir, f"{username}_report_{ts}.txt")

    with open(path, "w", encoding="utf-8") as f:
        f.write("GitHub Portfolio Score Report\n")
        f.write(f"Username: {username}\n")
        f.write(f"Generated: {ts}\n")
        f.write(f"Scored as of: {score.as_of.isoformat() if score.as_of else 'unknown'}\n\n")

        f.write(f"TOTAL SCORE: {score.total_score}/100\n")
        f.write(f"Profile type: {score.profile_type.value}\n\n")

        f.write("DIMENSIONS\n")
        for d in score.dimensions:
            f.write(f"- {d.name}: {d.score} (weight {d.weight}%)\n")
            f.write(f"    {d.feedback}\n")

        f.write("\nSTRENGTHS\n")
        for s in score.strengths:
            f.write(f"- {s}\n")

        f.write("\nTOP SUGGESTIONS\n")
        for i, s in enumerate(score.top_suggestions, start=1):
            f.write(
                f"{i}. [{s.priority.value}] {s.title} "
                f"(+{s.points} pts, {s.difficulty.value}, {s.time_estimate})\n"
            )

        f.write("\nRED FLAGS\n")
        if score.red_flags:
            for flag in score.red_flags:
                f.write(f"- ({flag.severity}) {flag.title}: {flag.description}\n")
        else:
            f.write("- none\n")

        f.write("\nTOP REPOS\n")
        for r in score.top_repos:
            f.write(f"- {r.name} | stars={r.stars} | lang={r.language}\n")

    return path


def save_score_json(username, score, reports_dir=REPORTS_DIR):
    """
    Save the full score as JSON.
    Returns the saved file path.

    sort_keys=True keeps the output byte-stable for identical scores.
    """
    ensure_reports_dir(reports_dir)

    ts = _timestamp()
    path = os.path.join(reports_dir, f"{username}_score_{ts}.json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(score.to_dict(), f, indent=2, sort_keys=True)

    return path


def dimension_rows(username, score):
    """One flat dict per dimension (used for the CSV export)."""
    rows = []
    for d in score.dimensions:
        rows.append({
            "username": username,
            "dimension": d.name,
            "score": d.score,
            "weight": d.weight,
            "weighted_points": round(d.score * d.weight / 100.0, 2),
            "feedback": d.feedback,
        })
    return rows


def save_dimensions_csv(username, score, reports_dir=REPORTS_DIR):
    """
    Save dimension rows as CSV.
    Returns the saved file path.
    """
    ensure_reports_dir(reports_dir)

    ts = _timestamp()
    path = os.path.join(reports_dir, f"{username}_dimensions_{ts}.csv")

    # newline="" prevents extra blank lines on Windows
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=DIMENSION_FIELDS)
        writer.writeheader()
        for row in dimension_rows(username, score):
            writer.writerow(row)

    return path


def load_snapshot_paths(path="snapshots.txt"):
    """
    Load snapshot JSON paths from a text file (one per line).
    Returns a list of strings.

    Expected file format:
      snapshots/torvalds.json
      snapshots/octocat.json
    """
    # Returning [] lets the menu carry on instead of crashing.
    if not os.path.exists(path):
        print(f"Error: file not found: {path}")
        return []

    paths = []

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            p = line.strip()
            if p != "":
                paths.append(p)

    return paths
