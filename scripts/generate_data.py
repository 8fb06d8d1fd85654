"""
Synthetic worklist generator.

Writes a deterministic pseudo-random JSON array of patient rows in the same
shape as the built-in mock data, for `worklist show --data-file` or for
serving from a stub endpoint.
"""

from __future__ import annotations

import json
import random
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List

import typer

from worklist.demo import generate_force_id, overall_status
from worklist.forms import FORM_NAMES, MULTI_INSTANCE_FORMS, FormStatus

app = typer.Typer(help="Generate a synthetic patient worklist as JSON.")

FIRST_NAMES = ["Ada", "Ben", "Cleo", "Dev", "Eli", "Fay", "Gus", "Hana", "Ivo", "Jun"]
LAST_NAMES = ["Adams", "Baker", "Chen", "Diaz", "Evans", "Ford", "Gupta", "Hale", "Ito", "Jones"]


def _form_statuses(rng: random.Random) -> Dict[str, Any]:
    statuses = [s.value for s in FormStatus]
    result: Dict[str, Any] = {}
    for form in FORM_NAMES:
        if form in MULTI_INSTANCE_FORMS and rng.random() < 0.4:
            result[form] = [rng.choice(statuses) for _ in range(rng.randint(2, 3))]
        else:
            result[form] = rng.choice(statuses)
    return result


def _generate_rows(rows: int, seed: int) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    start = date(2024, 1, 1)
    out: List[Dict[str, Any]] = []
    for i in range(1, rows + 1):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        form_statuses = _form_statuses(rng)
        out.append(
            {
                "id": i,
                "orderNumber": generate_force_id(rng),
                "customer": {
                    "name": f"{first} {last}",
                    "email": f"{first.lower()}.{last.lower()}@example.com",
                },
                "amount": round(rng.uniform(100, 5_000), 2),
                "orderDate": (start + timedelta(days=rng.randint(0, 364))).isoformat(),
                "status": overall_status(form_statuses),
                "formStatuses": form_statuses,
            }
        )
    return out


def _write_rows(path: Path, rows: int, seed: int) -> int:
    data = _generate_rows(rows, seed)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return len(data)


@app.command()
def main(
    output: Path = typer.Option(Path("data/worklist.json"), "--output", "-o"),
    rows: int = typer.Option(100, "--rows", "-r", min=0),
    seed: int = typer.Option(42, "--seed"),
) -> None:
    """Write `rows` synthetic patients to `output`."""
    written = _write_rows(output, rows, seed)
    typer.echo(f"Wrote {written} rows to {output}")


if __name__ == "__main__":
    app()
