"""
Static reference tables used for display enrichment.

Contains borough names, ZIP code neighborhoods, building class and DOB job
type descriptions, and HUD fair market rents.
"""

# Borough codes as used by PLUTO ('MN'), BBLs ('1') and HPD ('MANHATTAN')
BOROUGH_CODES = {
    "1": "Manhattan",
    "2": "Bronx",
    "3": "Brooklyn",
    "4": "Queens",
    "5": "Staten Island",
    "MN": "Manhattan",
    "BX": "Bronx",
    "BK": "Brooklyn",
    "QN": "Queens",
    "SI": "Staten Island",
    "MANHATTAN": "Manhattan",
    "BRONX": "Bronx",
    "BROOKLYN": "Brooklyn",
    "QUEENS": "Queens",
    "STATEN ISLAND": "Staten Island",
}

ZIP_TO_NEIGHBORHOOD = {
    # Manhattan
    "10001": "Chelsea",
    "10002": "Lower East Side",
    "10003": "East Village",
    "10009": "East Village",
    "10010": "Gramercy",
    "10011": "Chelsea",
    "10012": "SoHo",
    "10013": "Tribeca",
    "10014": "West Village",
    "10016": "Murray Hill",
    "10019": "Midtown West",
    "10021": "Upper East Side",
    "10023": "Upper West Side",
    "10024": "Upper West Side",
    "10025": "Upper West Side",
    "10026": "Harlem",
    "10027": "Harlem",
    "10028": "Upper East Side",
    "10029": "East Harlem",
    "10031": "Hamilton Heights",
    "10032": "Washington Heights",
    "10033": "Washington Heights",
    "10034": "Inwood",
    "10036": "Hell's Kitchen",
    "10040": "Washington Heights",
    # Bronx
    "10451": "Concourse",
    "10452": "Highbridge",
    "10453": "Morris Heights",
    "10456": "Morrisania",
    "10457": "Tremont",
    "10458": "Fordham",
    "10463": "Kingsbridge",
    "10467": "Norwood",
    "10468": "University Heights",
    # Brooklyn
    "11201": "Brooklyn Heights",
    "11205": "Fort Greene",
    "11206": "Williamsburg",
    "11211": "Williamsburg",
    "11215": "Park Slope",
    "11216": "Bedford-Stuyvesant",
    "11221": "Bushwick",
    "11222": "Greenpoint",
    "11225": "Crown Heights",
    "11226": "Flatbush",
    "11233": "Bedford-Stuyvesant",
    "11237": "Bushwick",
    "11238": "Prospect Heights",
    # Queens
    "11101": "Long Island City",
    "11102": "Astoria",
    "11103": "Astoria",
    "11104": "Sunnyside",
    "11354": "Flushing",
    "11372": "Jackson Heights",
    "11373": "Elmhurst",
    "11375": "Forest Hills",
    "11385": "Ridgewood",
    # Staten Island
    "10301": "St. George",
    "10304": "Stapleton",
    "10314": "New Springville",
}

BUILDING_CLASSES = {
    "A1": "One Family - Two Stories Detached",
    "A5": "One Family - Attached or Semi-Detached",
    "B1": "Two Family - Brick",
    "B2": "Two Family - Frame",
    "B3": "Two Family - Converted From One Family",
    "C0": "Three Families",
    "C1": "Walk-Up - Over Six Families Without Stores",
    "C2": "Walk-Up - Five to Six Families",
    "C3": "Walk-Up - Four Families",
    "C4": "Walk-Up - Old Law Tenement",
    "C5": "Walk-Up - Converted Dwelling or Rooming House",
    "C6": "Walk-Up - Cooperative",
    "C7": "Walk-Up - Over Six Families With Stores",
    "D0": "Elevator Co-op Conversion From Loft/Warehouse",
    "D1": "Elevator - Semi-Fireproof Without Stores",
    "D3": "Elevator - Fireproof Without Stores",
    "D4": "Elevator - Cooperatives",
    "D5": "Elevator - Converted",
    "D6": "Elevator - Fireproof With Stores",
    "D7": "Elevator - Semi-Fireproof With Stores",
    "D8": "Elevator - Luxury Type",
    "D9": "Elevator - Miscellaneous",
    "R1": "Condo - Residential Unit in 2-10 Unit Building",
    "R2": "Condo - Residential Unit in Walk-Up Building",
    "R4": "Condo - Residential Unit in Elevator Building",
    "S1": "Primarily One Family With One Store or Office",
    "S2": "Primarily Two Family With One Store or Office",
    "S3": "Primarily Three Family With One Store or Office",
    "S4": "Primarily Four Family With One Store or Office",
    "S9": "Single or Multiple Dwelling With Stores or Offices",
}

JOB_TYPES = {
    "A1": "Major Alteration (Change of Use/Occupancy)",
    "A2": "Alteration (Multiple Work Types)",
    "A3": "Minor Alteration (One Work Type)",
    "DM": "Demolition",
    "NB": "New Building",
    "SG": "Sign",
    "PA": "Place of Assembly",
}

# HUD FY2025 Fair Market Rents, New York HUD Metro FMR Area
HUD_FMR_NYC_2025 = {
    "0": 2646,
    "1": 2724,
    "2": 3079,
    "3": 3840,
    "4": 4139,
}

# HUD FY2025 Small Area Fair Market Rents by ZIP code
HUD_FAIR_MARKET_RENTS = {
    "10001": {"studio": 3550, "br1": 3650, "br2": 4130, "br3": 5150, "br4": 5550},
    "10002": {"studio": 2780, "br1": 2860, "br2": 3240, "br3": 4040, "br4": 4350},
    "10003": {"studio": 3550, "br1": 3650, "br2": 4130, "br3": 5150, "br4": 5550},
    "10009": {"studio": 3110, "br1": 3200, "br2": 3620, "br3": 4510, "br4": 4860},
    "10025": {"studio": 3020, "br1": 3110, "br2": 3520, "br3": 4390, "br4": 4730},
    "10027": {"studio": 2350, "br1": 2420, "br2": 2740, "br3": 3410, "br4": 3680},
    "10029": {"studio": 2250, "br1": 2320, "br2": 2620, "br3": 3270, "br4": 3520},
    "10032": {"studio": 2200, "br1": 2260, "br2": 2560, "br3": 3190, "br4": 3440},
    "10453": {"studio": 1900, "br1": 1960, "br2": 2210, "br3": 2760, "br4": 2970},
    "10458": {"studio": 1950, "br1": 2010, "br2": 2270, "br3": 2830, "br4": 3050},
    "11206": {"studio": 2710, "br1": 2790, "br2": 3160, "br3": 3940, "br4": 4240},
    "11211": {"studio": 3180, "br1": 3270, "br2": 3700, "br3": 4610, "br4": 4970},
    "11215": {"studio": 2980, "br1": 3070, "br2": 3470, "br3": 4330, "br4": 4660},
    "11216": {"studio": 2600, "br1": 2680, "br2": 3030, "br3": 3780, "br4": 4070},
    "11221": {"studio": 2510, "br1": 2580, "br2": 2920, "br3": 3640, "br4": 3920},
    "11226": {"studio": 2210, "br1": 2270, "br2": 2570, "br3": 3200, "br4": 3450},
    "11101": {"studio": 3240, "br1": 3330, "br2": 3770, "br3": 4700, "br4": 5060},
    "11102": {"studio": 2560, "br1": 2640, "br2": 2980, "br3": 3720, "br4": 4000},
    "11372": {"studio": 2290, "br1": 2360, "br2": 2670, "br3": 3330, "br4": 3580},
    "11385": {"studio": 2440, "br1": 2510, "br2": 2840, "br3": 3540, "br4": 3810},
}

FMR_YEAR = 2025
