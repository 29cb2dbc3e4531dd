import io

import pandas as pd

from customer_insights.export import (
    build_report_pdf,
    mailto_link,
    prepare_customer_rows,
    shareable_link,
    to_csv_bytes,
    to_excel_bytes,
)


def test_prepare_customer_rows(small_customers):
    rows = prepare_customer_rows(small_customers)
    assert rows.columns.tolist() == ["ID", "Name", "Gender", "Age", "Division", "Marital Status", "Income"]
    assert rows["Gender"].tolist() == ["Female", "Male", "Female", "Male", "Male"]


def test_excel_export_round_trips(small_customers):
    rows = prepare_customer_rows(small_customers)
    data = to_excel_bytes(rows, sheet_name="Customers")
    back = pd.read_excel(io.BytesIO(data), sheet_name="Customers")
    pd.testing.assert_frame_equal(back, rows, check_dtype=False)


def test_csv_export(small_customers):
    lines = to_csv_bytes(prepare_customer_rows(small_customers)).decode("utf-8").splitlines()
    assert lines[0] == "ID,Name,Gender,Age,Division,Marital Status,Income"
    assert lines[1] == "C1,Ayesha,Female,25,Dhaka,Married,0"
    assert len(lines) == 6


def test_mailto_link_percent_encodes_subject_and_body():
    link = mailto_link("Q1 Report", "Sales & income (up)!", ["a@example.com", "b@example.com"])
    assert link == (
        "mailto:a@example.com,b@example.com"
        "?subject=Q1%20Report&body=Sales%20%26%20income%20(up)!"
    )


def test_mailto_link_without_recipients():
    assert mailto_link("Hi", "line one\nline two") == "mailto:?subject=Hi&body=line%20one%0Aline%20two"


def test_shareable_link():
    assert shareable_link("http://localhost:8501/reports") == "http://localhost:8501/reports?share=true"
    assert shareable_link("http://localhost:8501/?tab=2") == "http://localhost:8501/?tab=2&share=true"


def test_pdf_report(reference_customers):
    pdf = build_report_pdf(reference_customers, title="Quarterly Review")
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_pdf_report_for_empty_selection():
    assert build_report_pdf([]).startswith(b"%PDF")
