"""Shared fixtures: a career dataset CSV builder and ready-made records."""

import csv
from io import StringIO

import pytest

from data_ingestion.record_parser import Record


HEADER = [
    "Field of Study", "Current Occupation", "Age", "Gender", "Years of Experience",
    "Education Level", "Industry Growth Rate", "Job Satisfaction", "Work-Life Balance",
    "Job Opportunities", "Salary", "Job Security", "Career Change Interest", "Skills Gap",
    "Family Influence", "Mentorship Available", "Certifications", "Freelancing Experience",
    "Geographic Mobility", "Professional Networks", "Career Change Events",
    "Technology Interest", "Likelihood to Change Occupation",
]


def make_row(age=30, experience=5, satisfaction=7, salary=60000, family="Medium",
             network=8, likelihood=0):
    """One 23-column data row with the analysed fields at their fixed positions."""
    row = ["x"] * len(HEADER)
    row[0] = "Medicine"
    row[1] = "Doctor"
    row[2] = str(age)
    row[4] = str(experience)
    row[7] = str(satisfaction)
    row[10] = str(salary)
    row[14] = family
    row[19] = str(network)
    row[22] = str(likelihood)
    return row


def to_csv(rows, header=HEADER):
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def make_varied_rows(count):
    """Rows where every analysed field varies, salary tracking age."""
    families = ["None", "Low", "Medium", "High"]
    rows = []
    for i in range(count):
        age = 22 + (i * 7) % 40
        rows.append(make_row(
            age=age,
            experience=(i * 3) % 25,
            satisfaction=1 + i % 10,
            salary=1500 * age + (i * 37) % 5000,
            family=families[i % 4],
            network=(i * 5) % 11,
            likelihood=i % 2,
        ))
    return rows


@pytest.fixture
def csv_text():
    return to_csv([
        make_row(age=25, experience=2, salary=45000, family="Low"),
        make_row(age=40, experience=15, salary=85000, family="High"),
        make_row(age=33, experience=8, salary=62000.5, family="None"),
    ])


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "career.csv"
    path.write_text(to_csv(make_varied_rows(200)), encoding="utf-8")
    return path


@pytest.fixture
def records():
    families = [0.0, 1.0, 2.0, 3.0]
    return [
        Record(
            id=i,
            age=float(20 + i),
            years_of_experience=float(i % 12),
            job_satisfaction=float(1 + (i * 3) % 10),
            professional_network_size=float((i * 7) % 9),
            family_influence=families[i % 4],
            salary=float(30000 + 2000 * i),
            likelihood_to_change_occupation=float(i % 2),
        )
        for i in range(40)
    ]
