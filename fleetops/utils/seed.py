"""
Seed de la flotte initiale / Initial fleet seeding.
Cree les grues et muncks de l'entreprise au premier demarrage si aucun vehicule n'existe.
Creates the company's cranes and munck trucks on first startup if no vehicles exist.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetops.models.vehicle import Vehicle, VehicleStatus, VehicleType

logger = logging.getLogger(__name__)

# (code, type, marque, modele, annee, plaque, chassis, capacite, tarif jour, tarif mois)
INITIAL_FLEET = [
    ("GD-01", VehicleType.CRANE, "SANY", "STC 800T5", 2024, "TJR3D89", "LFCNPG6P7R3002100", "80 Ton", 4000, 60000),
    ("GD-02", VehicleType.CRANE, "SANY", "STC 75", 2012, "EOE4294", "962S75425CS000066", "75 Ton", 3500, 50000),
    ("GD-03", VehicleType.CRANE, "SANY", "STC 900T5", 2022, "GCZ8J15", "LFCNPG6P2N3001379", "90 Ton", 4500, 70000),
    ("GD-04", VehicleType.CRANE, "SANY", "STC2200T7", 2025, "UFU1G28", "LFCNRG7P1S3003192", "220 Ton", 10000, 150000),
    ("GD-05", VehicleType.CRANE, "XCMG", "QY 25K 5-I", 2012, "IUL1J52", "LXGCPA325CA009872", "25 Ton", 2000, 35000),
    ("GD-06", VehicleType.CRANE, "XCMG", "QY 50K-II", 2011, "ODF8207", "LXGCPA413BA001113", "50 Ton", 3000, 45000),
    ("GD-07", VehicleType.CRANE, "XCMG", "XCT110 BR", 2022, "FUS7E64", "LXGCPA453NA000051", "110 Ton", 6000, 90000),
    ("MK-01", VehicleType.MUNCK, "SCANIA", "P 310 B8X2", 2014, "FHY9J50", "9BSP8X200E3863948", None, 1500, 25000),
    ("MK-02", VehicleType.MUNCK, "VOLVO", "VM 330 8X2R", 2021, "JBD6H98", "93KP0S1F5NE179342", None, 1800, 28000),
    ("MK-03", VehicleType.MUNCK, "VW", "23.220", 2003, "HRO7F92", "9BW2M82TX3R317700", None, 1000, 18000),
    ("MK-04", VehicleType.MUNCK, "VW", "24.280 CRM 6X2", 2020, "GIX2D98", "953658242MR121989", None, 1600, 26000),
    ("MK-05", VehicleType.MUNCK, "VW", "24.280 CRM 6X2", 2013, "FNF4421", "953658245DR352787", None, 1400, 22000),
]


async def seed_vehicles(session: AsyncSession) -> int:
    """Creer la flotte si la table est vide / Create the fleet if the table is empty.

    Retourne le nombre de vehicules crees / Returns the number of vehicles created.
    """
    result = await session.execute(select(func.count(Vehicle.id)))
    count = result.scalar()

    if count:
        logger.info("%d existing vehicle(s), seed skipped", count)
        return 0

    for code, vtype, brand, model, year, plate, chassis, capacity, daily, monthly in INITIAL_FLEET:
        session.add(Vehicle(
            code=code,
            vehicle_type=vtype,
            brand=brand,
            model=model,
            year=year,
            plate=plate,
            chassis=chassis,
            capacity=capacity,
            status=VehicleStatus.STOPPED,
            is_active=True,
            default_daily_rate=Decimal(daily),
            default_monthly_rate=Decimal(monthly),
        ))
    await session.commit()
    logger.info("Initial fleet seeded: %d vehicles", len(INITIAL_FLEET))
    return len(INITIAL_FLEET)
