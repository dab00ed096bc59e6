from io import BytesIO, StringIO
import csv

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from crm_insights.schemas.analytics import DashboardSummary


def dashboard_csv(summary: DashboardSummary) -> str:
    out = StringIO()
    writer = csv.writer(out)
    writer.writerow(["date", "day", "contacted", "converted"])
    for point in summary.chart:
        writer.writerow([point.date, point.label, point.contacted, point.converted])
    return out.getvalue()


def dashboard_pdf(summary: DashboardSummary, title: str = "CRM Insights") -> bytes:
    buffer = BytesIO()
    p = canvas.Canvas(buffer, pagesize=letter)
    y = 760
    p.setFont("Helvetica-Bold", 16)
    p.drawString(50, y, f"{title} - Executive Dashboard")
    y -= 22
    p.setFont("Helvetica", 9)
    p.drawString(50, y, f"Generated for {summary.generated_at:%Y-%m-%d %H:%M} UTC")
    y -= 32
    p.setFont("Helvetica", 11)

    trends = summary.trends
    lines = [
        f"Total Leads: {summary.leads_count} ({trends.leads.value})",
        f"Paying Clients: {summary.clients_count} ({trends.clients.value})",
        f"Active Services: {summary.active_services_count} ({trends.services.value})",
        f"Monthly Revenue: ${summary.monthly_revenue:,.2f} ({trends.revenue.value})",
        "",
        f"Campaign Emails Sent: {summary.campaign_stats.sent}",
        f"Campaign Opens: {summary.campaign_stats.opens}",
        f"Click Rate: {summary.campaign_stats.click_rate}",
        "",
        "Last 7 Days (contacted / converted):",
    ]
    lines.extend(f"  {point.label} {point.date}: {point.contacted} / {point.converted}" for point in summary.chart)
    lines.append("")
    lines.append("Leads by Country:")
    by_count = sorted(summary.country_distribution.items(), key=lambda kv: kv[1], reverse=True)
    lines.extend(f"  {country or '(blank)'}: {count}" for country, count in by_count)

    for line in lines:
        if y < 60:
            p.showPage()
            p.setFont("Helvetica", 11)
            y = 760
        p.drawString(50, y, line)
        y -= 18

    p.showPage()
    p.save()
    buffer.seek(0)
    return buffer.read()
