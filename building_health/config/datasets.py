"""
Configuration for NYC Open Data sources.

Maps the semantic dataset names used by the aggregator to Socrata dataset ids
on data.cityofnewyork.us.
"""

from dataclasses import dataclass, field
from typing import List

from building_health.errors import ConfigError


@dataclass(frozen=True)
class DatasetConfig:
    """Configuration for a single Socrata dataset."""

    key: str                     # Semantic name used in code
    dataset_id: str              # Socrata four-by-four id
    name: str                    # Display name
    agency: str = ""
    description: str = ""

    # Core datasets get the longer timeout
    core: bool = False

    # Candidate geometry columns for within_circle queries, in order
    geo_fields: tuple = field(default_factory=tuple)


_ENTRIES = [
    # Property
    DatasetConfig("pluto", "64uk-42ks", "PLUTO", "DCP", "Tax lot land use and building attributes", core=True),
    DatasetConfig("acris_legals", "8h5j-fqxa", "ACRIS Real Property Legals", "DOF"),
    DatasetConfig("dof_rolling_sales", "usep-8jbt", "DOF Rolling Sales", "DOF"),
    DatasetConfig("dof_exemptions", "muvi-b6kx", "DOF Property Exemption Detail", "DOF"),
    DatasetConfig("tax_lien_sales", "9rz4-mjek", "Tax Lien Sale Lists", "DOF"),

    # HPD
    DatasetConfig("hpd_violations", "wvxf-dwi5", "HPD Housing Maintenance Code Violations", "HPD", core=True),
    DatasetConfig("hpd_complaints", "ygpa-z7cr", "HPD Complaints and Problems", "HPD", core=True),
    DatasetConfig("hpd_registrations", "tesw-yqqr", "HPD Multiple Dwelling Registrations", "HPD", core=True),
    DatasetConfig("hpd_contacts", "feu5-w2e2", "HPD Registration Contacts", "HPD"),
    DatasetConfig("hpd_litigations", "59kj-x8nc", "HPD Housing Litigations", "HPD"),
    DatasetConfig("hpd_charges", "sbnd-xujn", "HPD Open Market Order Charges", "HPD"),
    DatasetConfig("hpd_vacate_orders", "tb8q-a3ar", "HPD Order to Repair/Vacate Orders", "HPD"),
    DatasetConfig("hpd_aep", "hcir-3275", "HPD Alternative Enforcement Program", "HPD"),
    DatasetConfig("hpd_conh", "bzxi-2tsw", "HPD Certification of No Harassment", "HPD"),

    # DOB
    DatasetConfig("dob_violations", "3h2n-5cm9", "DOB Violations", "DOB", core=True),
    DatasetConfig("dob_complaints", "eabe-havv", "DOB Complaints Received", "DOB"),
    DatasetConfig("dob_job_filings", "ic3t-wcy2", "DOB Job Application Filings", "DOB"),
    DatasetConfig("dob_permits_issued", "ipu4-2q9a", "DOB Permit Issuance", "DOB"),
    DatasetConfig("dob_safety", "855j-jady", "DOB Safety Violations", "DOB"),
    DatasetConfig("dob_ecb", "6bgk-3dad", "DOB ECB Violations", "DOB"),
    DatasetConfig("dob_vacates", "ez5e-9h4m", "DOB Vacate Orders", "DOB"),

    # Tenancy
    DatasetConfig("evictions", "6z8x-wfk4", "Marshal Evictions", "DOI"),
    DatasetConfig("housing_court", "hdyp-6dfd", "Housing Court Filings", "OCA"),
    DatasetConfig("speculation_watch", "adax-9x2w", "Speculation Watch List", "HPD"),
    DatasetConfig("rent_stabilized", "4m8d-8mdv", "Rent Stabilized Unit Counts", "DHCR"),
    DatasetConfig("subsidized_housing", "hg8x-zxpr", "Subsidized Housing Database", "HPD"),
    DatasetConfig("nycha", "evjd-dqpz", "NYCHA Residential Addresses", "NYCHA"),

    # Health
    DatasetConfig("rodents", "p937-wjvj", "Rodent Inspections", "DOHMH"),
    DatasetConfig("bedbugs", "wz6d-d3jb", "Bedbug Reporting", "HPD"),
    DatasetConfig("cooling_towers", "y4fw-iqfr", "Cooling Tower Registrations", "DOHMH"),
    DatasetConfig("restaurant_inspections", "43nn-pn8j", "Restaurant Inspection Results", "DOHMH",
                  geo_fields=("location",)),

    # 311 and public safety
    DatasetConfig("sr311", "erm2-nwe9", "311 Service Requests", "OTI", core=True),
    DatasetConfig("nypd_complaints", "5uac-w243", "NYPD Complaint Data Current", "NYPD", geo_fields=("lat_lon",)),
    DatasetConfig("nypd_shooting", "5ucz-vwe8", "NYPD Shooting Incidents", "NYPD", geo_fields=("the_geom",)),
    DatasetConfig("motor_vehicle_crashes", "h9gi-nx95", "Motor Vehicle Collisions", "NYPD", geo_fields=("location",)),

    # Environment
    DatasetConfig("flood_zones", "dsg6-ifza", "FEMA Flood Hazard Areas", "FEMA", geo_fields=("the_geom",)),
    DatasetConfig("hurricane_zones", "uihr-hn7s", "Hurricane Evacuation Zones", "NYCEM", geo_fields=("the_geom",)),

    # Neighborhood
    DatasetConfig("subway_entrances", "drex-xx56", "Subway Entrances", "MTA", geo_fields=("the_geom",)),
    DatasetConfig("bus_stops", "qafz-7myz", "Bus Stop Shelters", "DOT", geo_fields=("the_geom",)),
    DatasetConfig("citibike_stations", "p94q-8hxh", "Citi Bike Stations", "DOT", geo_fields=("the_geom",)),
    DatasetConfig("school_locations", "wg9x-4ke6", "School Locations", "DOE",
                  geo_fields=("location_1", "the_geom", "location", "lat_lon")),
    DatasetConfig("parks", "enfh-gkve", "Parks Properties", "DPR", geo_fields=("the_geom", "location", "lat_lon")),
    DatasetConfig("street_trees", "uvpi-gqnh", "Street Tree Census", "DPR", geo_fields=("the_geom",)),
    DatasetConfig("sidewalk_cafes", "qcdj-rwhu", "Sidewalk Cafe Licenses", "DCWP",
                  geo_fields=("the_geom", "location", "lat_lon")),
    DatasetConfig("wifi_hotspots", "yjub-udmw", "Wi-Fi Hotspot Locations", "OTI",
                  geo_fields=("the_geom", "location", "lat_lon")),
]


# Registry of all available datasets
DATASETS = {entry.key: entry for entry in _ENTRIES}


def get_dataset(key: str) -> DatasetConfig:
    """
    Get dataset configuration by semantic key.

    Args:
        key: Semantic dataset name (e.g. 'hpd_violations')

    Returns:
        DatasetConfig for the key

    Raises:
        ConfigError: If the key is not registered
    """
    try:
        return DATASETS[key]
    except KeyError:
        raise ConfigError(f"Unknown dataset: {key}") from None


def list_datasets() -> List[dict]:
    """List all registered datasets."""
    return [
        {
            "key": entry.key,
            "dataset_id": entry.dataset_id,
            "name": entry.name,
            "agency": entry.agency,
            "core": entry.core,
        }
        for entry in DATASETS.values()
    ]
