# report_utils.py
#
# What this file is:
# A one-page-at-a-time PDF version of the score report, drawn with ReportLab.
#
# The TXT report in file_utils.py has the same content. The PDF is the copy
# that gets attached to an email or printed.
#
# How it works (high level):
# - Create the reports/ folder if it doesn't exist
# - Build a timestamped filename so old reports aren't overwritten
# - Draw lines of text top to bottom on a ReportLab canvas
# - Start a new page when the cursor gets close to the bottom
# - Save the PDF and return the file path

import os
from datetime import datetime

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from file_utils import REPORTS_DIR, ensure_reports_dir

# ReportLab's drawString doesn't wrap, so long lines are clamped.
MAX_LINE_CHARS = 110


def export_score_pdf(username, score, reports_dir=REPORTS_DIR, output_name=None):
    """
    Create a PDF report for one PortfolioScore and return the saved path.

    Sections: headline score, dimensions (with feedback), strengths,
    top suggestions, red flags, activity, top repos.
    """
    ensure_reports_dir(reports_dir)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    if not output_name:
        output_name = f"{username}_score_report_{timestamp}.pdf"

    path = os.path.join(reports_dir, output_name)

    c = canvas.Canvas(path, pagesize=letter)
    width, height = letter

    x = 50
    y = height - 50
    line = 14

    def write(text, bold=False, indent=0):
        nonlocal y

        if y < 60:
            c.showPage()
            y = height - 50

        c.setFont("Helvetica-Bold" if bold else "Helvetica", 11)
        c.drawString(x + indent, y, str(text)[:MAX_LINE_CHARS])
        y -= line

    write("GitHub Portfolio Score Report", bold=True)
    write(f"Username: {username}")
    write(f"Generated: {timestamp}")
    if score.as_of is not None:
        write(f"Scored as of: {score.as_of.isoformat()}")
    write("")

    write(f"Total Score: {score.total_score}/100", bold=True)
    write(f"Profile type: {score.profile_type.value}")
    write("")

    write("Dimensions", bold=True)
    for d in score.dimensions:
        write(f"{d.name}: {d.score} (weight {d.weight}%)")
        write(d.feedback, indent=15)
    write("")

    write("Strengths", bold=True)
    for s in score.strengths:
        write(f"- {s}")
    write("")

    write("Top Suggestions", bold=True)
    if score.top_suggestions:
        for i, s in enumerate(score.top_suggestions, start=1):
            write(f"{i}. [{s.priority.value}] {s.title}")
            write(f"+{s.points} pts | {s.difficulty.value} | {s.time_estimate}", indent=15)
    else:
        write("Nothing to improve.")
    write("")

    write("Red Flags", bold=True)
    if score.red_flags:
        for flag in score.red_flags:
            write(f"({flag.severity}) {flag.title}")
            write(flag.description, indent=15)
    else:
        write("None")
    write("")

    a = score.activity
    write("Activity", bold=True)
    last = a.last_commit_date.date().isoformat() if a.last_commit_date else "never"
    write(f"Last commit: {last}")
    write(f"Commits / month: {round(a.commit_frequency, 2)}")
    write(f"Current streak: {a.current_streak} | Longest streak: {a.longest_streak}")
    write("")

    write("Top Repos", bold=True)
    if score.top_repos:
        for r in score.top_repos:
            write(f"{r.name} | stars={r.stars} | lang={r.language or 'n/a'}")
    else:
        write("No repositories.")

    c.save()
    return path
