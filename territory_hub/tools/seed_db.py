"""Seed the database with an admin account and an initial set of territories.

Usage:
    python -m territory_hub.tools.seed_db --maps-dir data/import
    python -m territory_hub.tools.seed_db --links-csv territories.csv
    python -m territory_hub.tools.seed_db --admin-email admin@example.org --admin-password secret
    python -m territory_hub.tools.seed_db --drop  # drop existing data first

Every PDF/image in ``--maps-dir`` becomes a territory named after the file
(``Territorio 12.pdf`` -> ``Territorio 12``). ``--links-csv`` rows need
``name`` and ``url`` columns and create territories pointing at external maps.
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path

from territory_hub.adapters.persistence.database import async_session_factory
from territory_hub.adapters.persistence.repositories import (
    SqlTerritoryRepository,
    SqlUserRepository,
    purge_all,
)
from territory_hub.adapters.security.passwords import BcryptPasswordHasher
from territory_hub.adapters.security.tokens import JwtTokenIssuer
from territory_hub.adapters.storage.local_storage import LocalMapStorage
from territory_hub.application.use_cases.auth import SignUpUseCase
from territory_hub.application.use_cases.manage_territories import (
    MAP_EXTENSIONS,
    CreateTerritoryUseCase,
)
from territory_hub.domain.errors import TerritoryHubError
from territory_hub.domain.value_objects.enums import UserRole

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


def discover_map_files(maps_dir: Path) -> list[Path]:
    """Map files in *maps_dir* (non-recursive), skipping hidden/metadata files."""
    return sorted(
        p for p in maps_dir.iterdir()
        if p.is_file()
        and not p.name.startswith(".")
        and p.suffix.lower() in MAP_EXTENSIONS
    )


def load_links(csv_path: Path) -> list[dict[str, str]]:
    """Read ``name,url`` rows; header names are matched case-insensitively."""
    with open(csv_path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        rows = []
        for raw in reader:
            row = {(k or "").strip().lower(): (v or "").strip() for k, v in raw.items()}
            name = row.get("name") or row.get("nome")
            url = row.get("url") or row.get("link")
            if not name or not url:
                logger.warning("Skipping incomplete row: %s", raw)
                continue
            rows.append({"name": name, "url": url})
    logger.info("Parsed %d territory links", len(rows))
    return rows


async def seed(
    maps_dir: Path | None = None,
    links_csv: Path | None = None,
    admin_email: str | None = None,
    admin_password: str | None = None,
    admin_name: str = "Administrador",
    drop: bool = False,
) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"users": 0, "territories": 0, "skipped": 0}

    async with async_session_factory() as session:
        if drop:
            await purge_all(session)
            await session.commit()
            logger.info("Dropped all existing data")

        users = SqlUserRepository(session)
        territories = SqlTerritoryRepository(session)

        # 1. Admin account
        if admin_email and admin_password:
            if await users.get_by_email(admin_email.strip().lower()):
                logger.info("User %s already exists, skipping", admin_email)
            else:
                signup = SignUpUseCase(users, BcryptPasswordHasher(), JwtTokenIssuer())
                result = await signup.execute(admin_name, admin_email, admin_password)
                if result.user.role != UserRole.ADMIN:
                    await users.update_role(result.user.id, UserRole.ADMIN)
                counts["users"] += 1
            await session.commit()

        existing_names = {t.name.lower() for t in await territories.get_all()}
        create = CreateTerritoryUseCase(territories, LocalMapStorage())

        # 2. Uploaded map files
        if maps_dir is not None:
            if not maps_dir.is_dir():
                raise FileNotFoundError(f"Maps directory not found: {maps_dir}")
            for path in discover_map_files(maps_dir):
                name = path.stem.strip()
                if name.lower() in existing_names:
                    logger.debug("Territory '%s' already exists, skipping", name)
                    counts["skipped"] += 1
                    continue
                with open(path, "rb") as f:
                    await create.execute(name, filename=path.name, content=f)
                existing_names.add(name.lower())
                counts["territories"] += 1
            await session.commit()

        # 3. External map links
        if links_csv is not None:
            for row in load_links(links_csv):
                if row["name"].lower() in existing_names:
                    counts["skipped"] += 1
                    continue
                try:
                    await create.execute(row["name"], map_url=row["url"])
                except TerritoryHubError as e:
                    logger.warning("Territory '%s' rejected: %s", row["name"], e)
                    counts["skipped"] += 1
                    continue
                existing_names.add(row["name"].lower())
                counts["territories"] += 1
            await session.commit()

    logger.info("Seed complete: %s", counts)
    return counts


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed territory database")
    parser.add_argument("--maps-dir", type=Path, help="Directory of PDF/image map files")
    parser.add_argument("--links-csv", type=Path, help="CSV with name,url columns")
    parser.add_argument("--admin-email", help="Create this administrator account")
    parser.add_argument("--admin-password", help="Password for --admin-email")
    parser.add_argument("--admin-name", default="Administrador")
    parser.add_argument("--drop", action="store_true", help="Drop existing data first")
    args = parser.parse_args()

    if bool(args.admin_email) != bool(args.admin_password):
        logger.error("--admin-email and --admin-password must be given together")
        sys.exit(2)

    try:
        asyncio.run(
            seed(
                maps_dir=args.maps_dir,
                links_csv=args.links_csv,
                admin_email=args.admin_email,
                admin_password=args.admin_password,
                admin_name=args.admin_name,
                drop=args.drop,
            )
        )
    except FileNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
