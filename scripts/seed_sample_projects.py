"""Seed sample projects that exercise the workflow rules.

Creates (idempotent):
  1. proj_bracket_rfq  - complete inquiry, ready to enter technical review
  2. proj_gearbox_rfq  - sitting in supplier_rfq_sent with 1 of 2 quotes received
  3. proj_housing_rfq  - bare inquiry with no customer, so its first move is blocked

Requires a running Factory Pulse server:
    factory-pulse-server --local --port 8081

Usage:
    python scripts/seed_sample_projects.py [--api-url http://localhost:8081/api/v1]
"""

import argparse
import sys

import httpx

MANAGER = "seed-script"


def _ensure_project(client: httpx.Client, payload: dict) -> bool:
    """Create the project unless it exists. Returns True when newly created."""
    project_id = payload["project_id"]
    r = client.get(f"/projects/{project_id}")
    if r.status_code == 200:
        print(f"   -> {project_id} already exists, skipping.")
        return False
    r = client.post("/projects", json=payload)
    if r.status_code != 201:
        print(f"   ERROR: {r.status_code} {r.text}", file=sys.stderr)
        sys.exit(1)
    print(f"   -> Created: {project_id}")
    return True


def _transition(client: httpx.Client, project_id: str, target: str) -> None:
    r = client.post(
        f"/projects/{project_id}/workflow/transition",
        json={"target_stage": target, "changed_by": MANAGER, "acting_role": "management"},
    )
    if r.status_code != 200:
        print(f"   ERROR moving {project_id} to {target}: {r.status_code} {r.text}", file=sys.stderr)
        sys.exit(1)
    print(f"   -> {project_id} now at {r.json()['new_stage']}")


def main(api_url: str) -> None:
    client = httpx.Client(base_url=api_url, timeout=15.0)

    print(f"Factory Pulse API: {api_url}")
    print()

    # ── 1. Ready inquiry ────────────────────────────────────────────────────
    print("1. Ensuring proj_bracket_rfq exists...")
    _ensure_project(client, {
        "project_id": "proj_bracket_rfq",
        "title": "Stainless mounting brackets (5k units)",
        "description": "Laser-cut 304 stainless brackets, brushed finish.",
        "customer_id": "cust_acme",
        "created_by": MANAGER,
    })

    # ── 2. Project waiting on supplier quotes ───────────────────────────────
    print("2. Ensuring proj_gearbox_rfq exists...")
    if _ensure_project(client, {
        "project_id": "proj_gearbox_rfq",
        "title": "Gearbox housing castings",
        "description": "Aluminium A356 castings with machined bores.",
        "customer_id": "cust_globex",
        "engineering_reviewer_id": "usr_eng_1",
        "qa_reviewer_id": "usr_qa_1",
        "production_reviewer_id": "usr_prod_1",
        "priority": "high",
        "created_by": MANAGER,
    }):
        _transition(client, "proj_gearbox_rfq", "technical_review")
        _transition(client, "proj_gearbox_rfq", "supplier_rfq_sent")
        for supplier, status in (("Northside Foundry", "received"), ("Delta Castings", "sent")):
            r = client.post(
                "/projects/proj_gearbox_rfq/supplier-quotes",
                json={"supplier_name": supplier, "status": status},
            )
            r.raise_for_status()
            print(f"   -> Quote from {supplier} ({status})")

    # ── 3. Blocked inquiry ──────────────────────────────────────────────────
    print("3. Ensuring proj_housing_rfq exists...")
    _ensure_project(client, {
        "project_id": "proj_housing_rfq",
        "title": "Injection-moulded sensor housing",
        "created_by": MANAGER,
    })

    print()
    print("Validation preview:")
    for project_id, target in (
        ("proj_bracket_rfq", "technical_review"),
        ("proj_gearbox_rfq", "quoted"),
        ("proj_housing_rfq", "technical_review"),
    ):
        r = client.post(f"/projects/{project_id}/workflow/validate", json={"target_stage": target})
        r.raise_for_status()
        result = r.json()
        print(f"   {project_id} -> {target}: valid={result['is_valid']} "
              f"approval={result['requires_manager_approval']}")
        for message in result["errors"] + result["warnings"]:
            print(f"      - {message}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--api-url", default="http://localhost:8081/api/v1")
    args = parser.parse_args()
    main(args.api_url)
