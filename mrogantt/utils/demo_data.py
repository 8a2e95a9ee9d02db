from __future__ import annotations

from datetime import date, timedelta
from io import StringIO
from typing import Dict, List
import csv


def _decode_tsv(raw: str) -> List[Dict[str, str]]:
    """Decode a TSV string that uses escaped tab characters."""
    stripped = raw.strip()
    decoded = stripped.replace("\\t", "\t").replace("\\n", "\n")
    reader = csv.DictReader(StringIO(decoded), delimiter="\t")
    rows: List[Dict[str, str]] = []
    for row in reader:
        cleaned = {key: value.strip() if isinstance(value, str) else value for key, value in row.items()}
        if any(cleaned.values()):
            rows.append(cleaned)
    return rows


AIRCRAFT_DATA = _decode_tsv(
    """
Matricule\tMRO\tVisite
CN-AOC\t3BAFRA\tCHECK C
CN-AOD\tBASG\tCHECK B
CN-AOF\t3BAFRA\tMOD
CN-AOJ\tBASG\tCHECK A
CN-AOM\t3BAFRA\tCHECK C
CN-AOR\tBASG\tCHECK B
"""
)


COMPONENT_DATA = _decode_tsv(
    """
Component Group\tWarning\tDuree
Moteurs\tN/A\t12
Hélices\tCaution\t8
Train d'atterrissage\tN/A\t10
Circuit carburant\tWorkStoppage\t15
Avionique\tN/A\t6
Structure\tCaution\t20
"""
)


def generate_demo_tasks(start_date: date | None = None, per_aircraft: int = 3) -> List[Dict[str, str]]:
    """Generate a deterministic task list in the render wire format."""
    if start_date is None:
        start_date = date.today()
    tasks: List[Dict[str, str]] = []
    for aircraft_index, aircraft in enumerate(AIRCRAFT_DATA):
        offset = aircraft_index * 4
        for slot in range(per_aircraft):
            component = COMPONENT_DATA[(aircraft_index + slot) % len(COMPONENT_DATA)]
            start = start_date - timedelta(days=10) + timedelta(days=offset + slot * 3)
            end = start + timedelta(days=int(component["Duree"]))
            progress = min(1.0, ((aircraft_index * 37 + slot * 23) % 11) / 10)
            tasks.append(
                {
                    "Component Group": component["Component Group"],
                    "Aircraft": aircraft["Matricule"],
                    "MRO": aircraft["MRO"],
                    "Warning": component["Warning"],
                    "Start Date": start.isoformat(),
                    "End Date": end.isoformat(),
                    "PercentComplete": f"{progress:.2f}",
                }
            )
    return tasks
