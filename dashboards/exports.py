"""
Report Export Builders

Render a report from RegistryReportService as an Excel workbook or a PDF.
Both formats share the same table layout below.
"""
from io import BytesIO

from django.utils import timezone
from django.utils.html import escape
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

SYSTEM_TITLE = "Farmer Management System"

REPORT_TITLES = {
    'overview': 'Overview Report',
    'farmers': 'Farmers Report',
    'events': 'Events Report',
    'concerns': 'Concerns Report',
    'allocations': 'Allocations Report',
    'allocation-analysis': 'Allocation Analysis',
    'allocation-types': 'Allocation Types',
}

OVERVIEW_METRICS = [
    ('Total Farmers', 'total_farmers'),
    ('Total Organic Farmers', 'total_organic_farmers'),
    ('Total Events', 'total_events'),
    ('Total Concerns', 'total_concerns'),
    ('Total Allocations', 'total_allocations'),
    ('New Farmers This Month', 'new_farmers_this_month'),
    ('New Organic Farmers This Month', 'new_organic_farmers_this_month'),
    ('New Events This Month', 'new_events_this_month'),
    ('New Concerns This Month', 'new_concerns_this_month'),
    ('Farmers With Allocations', 'farmers_with_allocations'),
    ('Farmers Without Allocations', 'farmers_without_allocations'),
    ('Organic Farmers With Allocations', 'organic_farmers_with_allocations'),
    ('Organic Farmers Without Allocations', 'organic_farmers_without_allocations'),
]

ALLOCATION_TYPE_COLUMNS = [
    ('Allocation Type', 'allocation_type'),
    ('Count', 'count'),
    ('Total Amount', 'total_amount'),
]

# report type -> [(section title, key of the row list, [(header, row key)])]
REPORT_TABLES = {
    'overview': [
        ('Registration Trends', 'registration_trends', [
            ('Month', 'month'), ('Farmers', 'farmers'), ('Organic Farmers', 'organic_farmers'),
        ]),
        ('Events by Month', 'events_by_month', [('Month', 'month'), ('Events', 'events')]),
        ('Allocation Types', 'allocation_type_stats', ALLOCATION_TYPE_COLUMNS),
    ],
    'farmers': [
        ('Farmers', 'farmers_list', [
            ('ID', 'id'), ('Name', 'name'), ('Email', 'email'), ('Municipality', 'municipality'),
            ('Status', 'status'), ('Category', 'category'), ('Registered', 'registration_date'),
            ('Hectares', 'hectares'), ('Primary Crop', 'primary_crop'), ('Allocations', 'allocation_count'),
        ]),
    ],
    'events': [
        ('Events', 'events_list', [
            ('ID', 'id'), ('Title', 'title'), ('Location', 'location'), ('Event Date', 'event_date'),
            ('For Farmers', 'for_farmers'), ('For Organic Farmers', 'for_organic_farmers'),
            ('Created', 'created_date'),
        ]),
    ],
    'concerns': [
        ('Concerns', 'concerns_list', [
            ('ID', 'id'), ('Title', 'title'), ('Farmer', 'farmer_name'), ('Type', 'type'),
            ('Status', 'status'), ('Messages', 'message_count'), ('Created', 'created_date'),
        ]),
    ],
    'allocations': [
        ('Allocations', 'allocations_list', [
            ('ID', 'id'), ('Amount', 'amount'), ('Type', 'allocation_type'), ('Approved', 'approved'),
            ('Created', 'created_at'), ('Recipients', 'recipient_names'),
        ]),
    ],
    'allocation-analysis': [
        ('Allocation Analysis', 'allocation_analysis', [
            ('Category', 'category'), ('Total Farmers', 'total_farmers'),
            ('With Allocations', 'farmers_with_allocations'),
            ('Without Allocations', 'farmers_without_allocations'),
            ('Allocation Rate (%)', 'allocation_rate'),
        ]),
    ],
    'allocation-types': [
        ('Allocation Types', 'allocation_type_stats', ALLOCATION_TYPE_COLUMNS),
    ],
}


def _cell_value(row, key):
    if key == 'recipient_names':
        return ', '.join(r['name'] for r in row.get('farmers', []))
    value = row.get(key, '')
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    return value


def report_tables(report_type, data):
    """Yield ``(title, headers, rows)`` for each table of the report."""
    if report_type == 'overview':
        yield (
            'Summary',
            ['Metric', 'Value'],
            [[label, data.get(key, 0)] for label, key in OVERVIEW_METRICS],
        )
    for title, list_key, columns in REPORT_TABLES[report_type]:
        headers = [header for header, _ in columns]
        rows = [[_cell_value(row, key) for _, key in columns] for row in data.get(list_key, [])]
        yield title, headers, rows


def export_filename(report_type, extension):
    return f"{report_type.replace('-', '_')}_report_{timezone.now().strftime('%Y%m%d')}.{extension}"


# =============================================================================
# EXCEL EXPORT
# =============================================================================

def build_report_workbook(report_type, data, period_label=''):
    """Return the report as ``.xlsx`` bytes, one sheet per table."""
    wb = Workbook()
    wb.remove(wb.active)

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="1F6F3F", end_color="1F6F3F", fill_type="solid")

    for title, headers, rows in report_tables(report_type, data):
        ws = wb.create_sheet(title=title[:31])

        ws['A1'] = f"{SYSTEM_TITLE} - {REPORT_TITLES[report_type]}"
        ws['A1'].font = Font(bold=True, size=14)
        ws['A2'] = f"Generated: {timezone.localtime().strftime('%Y-%m-%d %H:%M')}"
        if period_label:
            ws['A3'] = f"Period: {period_label}"

        header_row = 5
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=header_row, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal='center')

        for row_num, row in enumerate(rows, header_row + 1):
            for col, value in enumerate(row, 1):
                ws.cell(row=row_num, column=col, value=value)

        for col in range(1, len(headers) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 20

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# =============================================================================
# PDF EXPORT
# =============================================================================

def build_report_pdf(report_type, data, period_label=''):
    """Return the report as PDF bytes."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        rightMargin=1*cm,
        leftMargin=1*cm,
        topMargin=1.5*cm,
        bottomMargin=1.5*cm
    )

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='MainTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=20,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#1F6F3F')
    ))
    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=15,
        spaceAfter=10,
        textColor=colors.HexColor('#2E8B57')
    ))
    styles.add(ParagraphStyle(
        name='SubInfo',
        parent=styles['Normal'],
        fontSize=10,
        alignment=TA_CENTER,
        textColor=colors.grey
    ))
    cell_style = ParagraphStyle(name='Cell', parent=styles['Normal'], fontSize=8)

    table_style = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1F6F3F')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('BACKGROUND', (0, 1), (-1, -1), colors.HexColor('#EEF7F0')),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ])

    elements = [
        Paragraph(SYSTEM_TITLE, styles['MainTitle']),
        Paragraph(REPORT_TITLES[report_type], styles['Heading2']),
    ]
    sub_info = f"Generated: {timezone.localtime().strftime('%Y-%m-%d %H:%M')}"
    if period_label:
        sub_info = f"Period: {period_label} | {sub_info}"
    elements.append(Paragraph(sub_info, styles['SubInfo']))
    elements.append(Spacer(1, 20))

    for title, headers, rows in report_tables(report_type, data):
        elements.append(Paragraph(title, styles['SectionTitle']))
        if not rows:
            elements.append(Paragraph("No records for this period.", styles['Normal']))
            continue

        # Wrap long text so wide tables stay on the page
        body = [[Paragraph(escape(str(value)), cell_style) for value in row] for row in rows]
        t = Table([headers] + body, repeatRows=1)
        t.setStyle(table_style)
        elements.append(t)
        elements.append(Spacer(1, 15))

    doc.build(elements)
    return buffer.getvalue()
