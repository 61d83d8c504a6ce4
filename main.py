# main.py
#
# What this file is:
# The command-line (terminal) front end for the portfolio scorer.
# It uses a simple menu and prints results to the console.
#
# Big picture flow (Option 1):
#   snapshot JSON -> snapshot.py (normalize) -> engine.py (score)
#   -> file_utils.py (TXT/JSON/CSV exports) + report_utils.py (PDF export)
#
# Snapshots are produced by a separate fetch step; this program only reads
# them from disk. Printing stays here, analysis stays in engine.py.

import os

from config import load_scoring_config
from engine import score_portfolio
from file_utils import (
    load_snapshot_paths,
    save_dimensions_csv,
    save_report,
    save_score_json,
)
from report_utils import export_score_pdf
from snapshot import load_snapshot


def print_menu():
    print("\nGitHub Portfolio Scorer")
    print("----------------------------")
    print("1. Score a snapshot file (export TXT/JSON/CSV/PDF)")
    print("2. Score snapshots listed in a file (summary only)")
    print("3. Show top suggestions")
    print("4. Show activity & streaks")
    print("5. Show red flags")
    print("q. Quit")


def print_score(score):
    """Print the headline score and each dimension in a fixed order."""
    print("\nPORTFOLIO SCORE")
    print("----------------------------")
    print(f"{'total':22} : {score.total_score}/100")
    print(f"{'profile type':22} : {score.profile_type.value}")

    for d in score.dimensions:
        print(f"{d.name:22} : {d.score:3} (weight {d.weight}%)  {d.feedback}")

    print(f"{'strengths':22} : {', '.join(score.strengths)}")


def print_suggestions(score):
    print("\nTOP SUGGESTIONS")
    print("----------------------------")
    if not score.top_suggestions:
        print("Nothing to improve. Nice!")
        return
    for i, s in enumerate(score.top_suggestions, start=1):
        print(f"{i}. [{s.priority.value:8}] {s.title} | +{s.points} pts | {s.difficulty.value} | {s.time_estimate}")


def print_activity(score):
    a = score.activity
    print("\nACTIVITY")
    print("----------------------------")
    last = a.last_commit_date.date().isoformat() if a.last_commit_date else "never"
    print(f"{'last commit':20} : {last}")
    print(f"{'commits / month':20} : {round(a.commit_frequency, 2)}")
    print(f"{'active days':20} : {a.active_days}")
    print(f"{'current streak':20} : {a.current_streak}")
    print(f"{'longest streak':20} : {a.longest_streak}")
    print(f"{'total contributions':20} : {a.total_contributions}")


def print_red_flags(score):
    print("\nRED FLAGS")
    print("----------------------------")
    if not score.red_flags:
        print("No red flags found.")
        return
    for flag in score.red_flags:
        print(f"- ({flag.severity}) {flag.title}: {flag.description}")


def _username_for(path, snap):
    if snap.user.login:
        return snap.user.login
    return os.path.splitext(os.path.basename(path))[0]


def _load_and_score(path, config):
    """
    Load + score one snapshot file.
    Returns (username, score), or (None, None) after printing the error.
    """
    try:
        snap = load_snapshot(path)
    except (OSError, ValueError) as e:
        print(f"Error loading snapshot {path}: {e}")
        return None, None

    return _username_for(path, snap), score_portfolio(snap, config=config)


def _ask_path():
    path = input("Enter snapshot JSON path: ").strip()
    if path == "":
        print("Error: path cannot be empty.")
        return None
    return path


def score_one(config):
    """Full pipeline for one snapshot: load -> score -> exports."""
    path = _ask_path()
    if path is None:
        return

    username, score = _load_and_score(path, config)
    if score is None:
        return

    txt_path = save_report(username, score)
    json_path = save_score_json(username, score)
    csv_path = save_dimensions_csv(username, score)
    pdf_path = export_score_pdf(username, score)

    print("\nEXPORTS")
    print("----------------------------")
    print("Report TXT    :", txt_path)
    print("Score JSON    :", json_path)
    print("Dimensions CSV:", csv_path)
    print("Report PDF    :", pdf_path)

    print_score(score)
    print_suggestions(score)


def score_file(config):
    """Score every snapshot listed in snapshots.txt (no exports)."""
    paths = load_snapshot_paths()
    if not paths:
        print("No snapshots found. Create snapshots.txt with one JSON path per line.")
        return

    for p in paths:
        print(f"\nScoring {p}...")
        username, score = _load_and_score(p, config)
        if score is None:
            continue
        print(f"  {username}: {score.total_score}/100 ({score.profile_type.value})")


def detail_option(config, printer):
    """Load + score one snapshot, then show one detail view."""
    path = _ask_path()
    if path is None:
        return
    _, score = _load_and_score(path, config)
    if score is None:
        return
    printer(score)


def main():
    """
    Sentinel-controlled main menu loop: keep going until the user enters "q".
    """
    try:
        config = load_scoring_config()
    except (OSError, ValueError) as e:
        print(f"Error loading scoring config: {e}")
        return

    choice = ""
    while choice != "q":
        print_menu()
        choice = input("Choice: ").strip().lower()

        if choice == "1":
            score_one(config)
        elif choice == "2":
            score_file(config)
        elif choice == "3":
            detail_option(config, print_suggestions)
        elif choice == "4":
            detail_option(config, print_activity)
        elif choice == "5":
            detail_option(config, print_red_flags)
        elif choice == "q":
            print("Goodbye!")
        else:
            print("Invalid option. Try again.")


if __name__ == "__main__":
    main()
