from leadfinder.etl import export
from leadfinder.models import ContactDetails, Lead


def make_lead(**overrides):
    fields = dict(
        id="pid",
        business_name='Sri "Krishna" Electronics, Anna Nagar',
        business_type="Electronics",
        location="Chennai",
        contact_details=ContactDetails(email="info@krishna.in", phone="+91 44 1234 5678", website="https://krishna.in"),
        address="12, 2nd Avenue,\nAnna Nagar, Chennai 600040",
        description="Rating: 4.5/5 stars.",
        verification_score=120,
    )
    fields.update(overrides)
    return Lead(**fields)


def test_csv_round_trip_preserves_key_fields():
    leads = [make_lead(), make_lead(id="p2", business_name="Plain", address="", verification_score=0)]

    records = export.read_csv(export.to_csv(leads))

    assert [r["Business Name"] for r in records] == [lead.business_name for lead in leads]
    assert [r["Verification Score"] for r in records] == [120, 0]
    assert [r["Address"] for r in records] == [lead.address for lead in leads]


def test_sheet_values_start_with_headers():
    values = export.to_sheet_values([make_lead()])
    assert values[0] == export.EXPORT_HEADERS
    assert values[1][3] == "info@krishna.in"
    assert values[1][-1] == 120


def test_export_filename():
    assert export.export_filename("Home Decor", "Chennai") == "Lead_Generation_Home_Decor_in_Chennai.csv"
