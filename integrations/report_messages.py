"""
Holiday report message templates (Hebrew / English).

Usage:
    from integrations.report_messages import get_message

    message = get_message("whatsapp_header", store="...", holiday="Pesach", ...)
"""

from decimal import Decimal
from typing import Optional

from config import settings

MESSAGES = {
    "he": {
        "unit_kg": 'ק"ג',
        "unit_units": "יח׳",

        "status_no_orders": "אין הזמנות לחג זה",
        "status_sufficient_stock": "מלאי מספיק לכל הדגים",
        "status_report_generated": "נמצאו דגים חסרים במלאי",

        "whatsapp_header": """📊 *דוח ספקים לחג - {store}*
🎉 חג: {holiday}
📅 תקופה: {start_date} - {end_date}
🧾 סה"כ הזמנות: {total_orders}
""",

        "whatsapp_deficits_title": "\n🐟 *דגים חסרים במלאי ({count}):*",

        "whatsapp_deficit_line": "• {fish}: נדרש {demand}, במלאי {stock}, *חסר {deficit}*",

        "whatsapp_status_line": "\n✅ {status}",

        "whatsapp_footer": """
💡 מומלץ להוסיף מרווח בטחון של 10-15%
🐟 {store}""",

        "email_subject": "דוח ספקים - {holiday} ({count} פריטים חסרים)",

        "email_subject_status": "דוח ספקים - {holiday}: {status}",

        "email_title": "דוח ספקים - {holiday}",
        "email_holiday_date": "תאריך החג",
        "email_generated_at": "תאריך יצירת הדוח",
        "email_deficits_title": "דגים שחסרים במלאי ({count} פריטים):",
        "email_col_fish": "דג",
        "email_col_weight": "משקל ממוצע",
        "email_col_demand": "כמות נדרשת",
        "email_col_stock": "מלאי נוכחי",
        "email_col_deficit": "חסר",
        "email_footer": "דוח זה נוצר אוטומטית {days} ימים לפני החג כדי לעזור לך להיערך עם הספקים.",
    },
    "en": {
        "unit_kg": "kg",
        "unit_units": "units",

        "status_no_orders": "No orders for this holiday",
        "status_sufficient_stock": "Stock covers all fish",
        "status_report_generated": "Some fish are short",

        "whatsapp_header": """📊 *Holiday supplier report - {store}*
🎉 Holiday: {holiday}
📅 Period: {start_date} - {end_date}
🧾 Total orders: {total_orders}
""",

        "whatsapp_deficits_title": "\n🐟 *Short in stock ({count}):*",

        "whatsapp_deficit_line": "• {fish}: need {demand}, in stock {stock}, *short {deficit}*",

        "whatsapp_status_line": "\n✅ {status}",

        "whatsapp_footer": """
💡 Consider a 10-15% safety margin
🐟 {store}""",

        "email_subject": "Supplier report - {holiday} ({count} items short)",

        "email_subject_status": "Supplier report - {holiday}: {status}",

        "email_title": "Supplier report - {holiday}",
        "email_holiday_date": "Holiday date",
        "email_generated_at": "Generated",
        "email_deficits_title": "Fish short in stock ({count} items):",
        "email_col_fish": "Fish",
        "email_col_weight": "Avg. weight",
        "email_col_demand": "Required",
        "email_col_stock": "In stock",
        "email_col_deficit": "Short",
        "email_footer": "This report is generated automatically {days} days before the holiday to help you prepare with suppliers.",
    },
}


def get_lang(lang: Optional[str] = None) -> str:
    """Resolve the report language, defaulting to settings."""
    lang = lang or settings.report_language
    return lang if lang in MESSAGES else "he"


def get_message(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """
    Get translated message template and format with kwargs.

    Args:
        key: Message template key
        lang: "he" or "en" (defaults to settings.report_language)
        **kwargs: Format arguments for the template

    Returns:
        Formatted message string
    """
    lang_messages = MESSAGES[get_lang(lang)]
    template = lang_messages.get(key, MESSAGES["en"].get(key, key))
    try:
        return template.format(**kwargs)
    except KeyError:
        # Return template as-is if formatting fails
        return template


def format_quantity(value: Decimal, unit: str, lang: Optional[str] = None) -> str:
    """Render a quantity with its unit label: kg with one decimal, units whole."""
    unit = getattr(unit, "value", unit)
    if unit == "kg":
        return f"{Decimal(value):.1f} {get_message('unit_kg', lang)}"
    return f"{int(value)} {get_message('unit_units', lang)}"
