import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from marathon.domain.money import format_money

RESULT_COLORS = {
    "win": colors.HexColor("#C8E6C9"),
    "loss": colors.HexColor("#FFCDD2"),
}


def generate_pdf_for_plan(plan, entries, stats):
    """Generate a PDF with the plan summary and a Day / Wager / Odds / Winnings / Result table."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"{plan.name} ({plan.status})", styles["Title"]),
        Paragraph(
            f"Start {format_money(plan.start_wager)} at odds {plan.odds} for {plan.days} days. "
            f"Progress {stats['progress_percentage']}%, win rate {stats['win_rate']}%, "
            f"potential final {format_money(stats['potential_final'])}.",
            styles["Normal"],
        ),
        Spacer(1, 16),
    ]

    data = [["Day", "Wager", "Odds", "Winnings", "Result"]]
    for e in entries:
        data.append([str(e.day), format_money(e.wager), str(e.odds), format_money(e.winnings), e.result])

    style = [
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]
    for row, e in enumerate(entries, start=1):
        if e.result in RESULT_COLORS:
            style.append(("BACKGROUND", (0,row), (-1,row), RESULT_COLORS[e.result]))

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(style))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
