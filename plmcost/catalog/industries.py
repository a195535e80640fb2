"""Industry options and the sector names offered for each industry."""

from __future__ import annotations

from typing import NamedTuple

OTHER = "other"
GENERAL_SECTOR_LABEL = "General"
FALLBACK_INDUSTRY = "general-discrete-manufacturing"


class IndustryOption(NamedTuple):
    value: str
    label: str


INDUSTRY_OPTIONS: tuple[IndustryOption, ...] = (
    IndustryOption("automotive", "Automotive"),
    IndustryOption("electronics-and-high-tech", "Electronics and High-Tech"),
    IndustryOption(
        "home-appliances-and-consumer-electronics",
        "Home Appliances and Consumer Electronics",
    ),
    IndustryOption("industrial-machinery", "Industrial Machinery"),
    IndustryOption("semiconductors", "Semiconductors"),
    IndustryOption("construction-equipment", "Construction Equipment"),
    IndustryOption("plastics-manufacturing-molding", "Plastics Manufacturing (Molding)"),
    IndustryOption("aerospace-and-defense", "Aerospace and Defense"),
    IndustryOption("medical-devices", "Medical Devices"),
    IndustryOption("electrical-engineering", "Electrical Engineering"),
    IndustryOption("mechanical-engineering", "Mechanical Engineering"),
    IndustryOption("robotics-and-automation", "Robotics and Automation"),
    IndustryOption("telecommunications-equipment", "Telecommunications Equipment"),
    IndustryOption("consumer-goods-and-toys", "Consumer Goods and Toys"),
    IndustryOption("hvac", "HVAC (Heating, Ventilation & A/C)"),
    IndustryOption(
        "commercial-and-residential-lighting", "Commercial and Residential Lighting"
    ),
    IndustryOption(
        "scientific-and-measurement-instrumentation",
        "Scientific and Measurement Instrumentation",
    ),
    IndustryOption("furniture-and-fixtures", "Furniture and Fixtures"),
    IndustryOption("sports-equipment", "Sports Equipment"),
    IndustryOption("tool-and-die", "Tool and Die"),
)

SECTORS: dict[str, tuple[str, ...]] = {
    "industrial-machinery": (
        "CNC Equipment",
        "Industrial Robots",
        "Conveyor and Handling Systems",
        "Packaging Machinery",
        "Packing Machinery",
        "Pumps and Compressors",
        "Hydraulic Systems",
        "Pneumatic Systems",
        "Mechanical Presses",
        "Welding Equipment",
        "Agricultural Machinery",
        "Food Processing Machinery",
        "Mining Machinery",
        "Lifting Systems",
        "Light Construction Machinery",
        "Industrial Control Systems",
        "Printing Machinery",
        "Recycling Machinery",
        "Measurement Machinery",
        "Industrial Maintenance Equipment",
    ),
    "mechanical-engineering": (
        "Transmissions",
        "Actuators",
        "Gears",
        "Centrifugal Pumps",
        "Compressors",
        "Control Valves",
        "Shafts and Couplings",
        "Bearings and Supports",
        "Industrial Cooling Systems",
        "Precision Mechanisms",
        "Power Units",
        "Lubrication Systems",
        "Metal Structures",
        "Thermal Converters",
        "Vibration Systems",
        "Mechanical Converters",
        "Cam Mechanisms",
        "Motion Control Systems",
        "Torque Converters",
        "Modular Mechanical Assemblies",
    ),
    "electrical-engineering": (
        "Electric Motors",
        "Electrical Panels",
        "Power Supplies",
        "Transformers",
        "Generators",
        "Inverters",
        "Frequency Converters",
        "Control Panels",
        "Circuit Breakers",
        "Contactors",
        "Relays",
        "UPS Backup Units",
        "Distribution Systems",
        "Electrical Protection Modules",
        "Voltage Regulators",
        "Soft Starters",
        "Electrical Sensors",
        "Industrial Connectors",
        "Power Control Systems",
        "High Voltage Cables",
    ),
    "automotive": (
        "Bodyworks",
        "Chassis",
        "Engines",
        "Transmissions",
        "Electrical Systems",
        "Electronic Modules",
        "Interiors",
        "Brake Systems",
        "Suspensions",
        "Drive Axles",
        "Exhaust Systems",
        "Climate Control Systems",
        "Safety Systems",
        "Lighting Systems",
        "Battery Modules",
        "Undercarriages",
        "Instrument Panels",
        "Infotainment Systems",
        "Power Steering",
        "Modular Doors and Roofs",
    ),
    "electronics-and-high-tech": (
        "Microprocessors",
        "Motherboards",
        "Electronic Boards",
        "Power Modules",
        "Power Supplies",
        "Sensors",
        "IoT Modules",
        "Processing Units",
        "Batteries",
        "Displays",
        "Cameras",
        "Communication Devices",
        "Routers",
        "Connectivity Modules",
        "Wearable Devices",
        "Converters",
        "Cooling Systems",
        "Optical Modules",
        "Display Panels",
        "SMT Assemblies",
    ),
    "aerospace-and-defense": (
        "Fuselages",
        "Wings",
        "Turbofan Engines",
        "Avionics",
        "Flight Control Systems",
        "Cockpits",
        "Composite Structures",
        "Electrical Systems",
        "Landing Gear",
        "Nacelles",
        "Hydraulic Systems",
        "Fuel Systems",
        "Communication Systems",
        "Radar Systems",
        "Navigation Modules",
        "Stabilizers",
        "Doors",
        "Seats",
        "Oxygen Systems",
        "Pressurized Tanks",
    ),
    "medical-devices": (
        "Diagnostic Equipment",
        "Multi-parameter Monitors",
        "Clinical Analyzers",
        "Ventilators",
        "Infusion Pumps",
        "Defibrillators",
        "Assisted Surgery Modules",
        "Laparoscopic Equipment",
        "Sterilization Systems",
        "Pacemakers",
        "Prosthetics",
        "Hospital Beds",
        "Incubators",
        "Dental Systems",
        "Portable Respirators",
        "Rehabilitation Equipment",
        "Electric Wheelchairs",
        "Suction Units",
        "Laboratory Equipment",
        "Medical Telemetry Modules",
    ),
    "robotics-and-automation": (
        "Robotic Arms",
        "Controllers",
        "Servomotors",
        "Vision Systems",
        "Linear Actuators",
        "Force Sensors",
        "Grippers",
        "Reducers",
        "AI Modules",
        "Robotic Workstations",
        "Conveyors",
        "Electronic Modules",
        "Control Boards",
        "Mechanical Structures",
        "Control Panels",
        "Frequency Converters",
        "Calibration Modules",
        "Safety Systems",
        "Industrial Connectors",
        "Communication Units",
    ),
    "construction-equipment": (
        "Excavators",
        "Loaders",
        "Cranes",
        "Backhoes",
        "Motor Graders",
        "Compactors",
        "Diesel Engines",
        "Hydraulic Systems",
        "Heavy-duty Transmissions",
        "Chassis",
        "Operator Cabs",
        "Articulated Arms",
        "Undercarriages",
        "Pavers",
        "Drills",
        "Rotating Turrets",
        "Cooling Modules",
        "Control Systems",
        "Drive Axles",
    ),
    "tool-and-die": (
        "Precision Molds",
        "Cutting Dies",
        "Stamping Presses",
        "Punching Systems",
        "Machining Tools",
        "Clamping Devices",
        "Progressive Dies",
        "Hydraulic Presses",
        "Milling Heads",
        "Mold Bases",
        "Calipers",
        "Torque Tools",
        "Tool Holders",
        "Alignment Devices",
        "Adjustment Systems",
        "Pneumatic Tools",
        "Dimensional Control Devices",
        "Guiding Systems",
        "Assembly Devices",
        "Testing Stations",
    ),
    "hvac": (
        "Air Conditioners",
        "Chillers",
        "Heat Pumps",
        "Condensing Units",
        "Evaporators",
        "Compressors",
        "Fans",
        "Heat Exchangers",
        "Control Systems",
        "Cooling Towers",
        "Modular Ducts",
        "Expansion Valves",
        "Thermostats",
        "Thermal Sensors",
        "Filters",
        "Electrical Panels",
        "Metal Structures",
        "Refrigeration Units",
        "Climate Control Modules",
        "Pumping Systems",
        "Electronic Controllers",
    ),
    "furniture-and-fixtures": (
        "Metal Structures",
        "Hardware",
        "Reclining Mechanisms",
        "Sliding Systems",
        "Hinges",
        "Chair Frames",
        "Storage Units",
        "Assembly Modules",
        "Swivel Bases",
        "Rails",
        "Adjustable Legs",
        "Brackets",
        "Anchors",
        "Integrated Lighting Systems",
        "Hydraulic Mechanisms",
        "Aluminum Profiles",
        "Modular Joints",
        "Magnetic Latches",
        "Damping Systems",
        "Ergonomic Accessories",
    ),
    "consumer-goods-and-toys": (
        "Portable Appliances",
        "Vacuum Cleaners",
        "Electronic Toys",
        "Game Consoles",
        "Smartwatches",
        "Electric Scooters",
        "Bicycles",
        "Recreational Drones",
        "Portable Audio Systems",
        "Interactive Robots",
        "Coffee Machines",
        "Electric Skateboards",
        "Purifiers",
        "Smart Lamps",
        "Fans",
        "Household Tools",
        "Electric Toothbrushes",
        "Automatic Dispensers",
        "Kitchen Devices",
        "Portable Chargers",
    ),
    "home-appliances-and-consumer-electronics": (
        "Refrigerators",
        "Washing Machines",
        "LED TVs",
        "OLED TVs",
        "Microwave Ovens",
        "Vacuum Cleaners",
        "Air Conditioners",
        "Dishwashers",
        "Dryers",
        "Electric Ovens",
        "Induction Cooktops",
        "Surround Sound Systems",
        "Soundbars",
        "Video Game Consoles",
        "Robot Vacuums",
        "Blenders",
        "Mixers",
        "Food Processors",
        "Coffee Makers",
        "Air Fryers",
        "Freezers",
        "Gas Stoves",
        "Extractor Hoods",
        "Air Purifiers",
        "Electric Heaters",
        "Dehumidifiers",
        "Fans",
        "Electric Irons",
        "Toasters",
        "Electric Kettles",
        "Water Dispensers",
        "Home Projectors",
        "Bluetooth Speakers",
        "Hi-Fi Audio Equipment",
        "Media Players",
        "Home Monitors",
        "Wi-Fi Routers",
        "Home Security Cameras",
        "Smart Doorbells",
    ),
    "sports-equipment": (
        "Bicycles",
        "Gym Equipment",
        "Treadmills",
        "Elliptical Machines",
        "Adjustable Weights",
        "Training Benches",
        "Multi-functional Machines",
        "Stationary Bikes",
        "Sports Scooters",
        "Electric Skateboards",
        "Rollers",
        "Rowing Machines",
        "Metal Structures",
        "Resistance Systems",
        "Electronic Control Devices",
        "Performance Sensors",
        "Damping Modules",
        "Brackets",
        "Training Structures",
        "Sports Simulators",
    ),
    "plastics-manufacturing-molding": (
        "Automotive Components",
        "Housings",
        "Industrial Containers",
        "Appliance Parts",
        "Medical Components",
        "Electronic Enclosures",
        "Plastic Assembly Modules",
        "Structural Parts",
        "Protective Covers",
        "Connectors",
        "Trays",
        "Lighting Parts",
        "Plastic Tools",
        "Consumer Accessories",
        "Front Panels",
        "Switches",
        "Sensor Housings",
        "Modular Boxes",
        "Frames",
        "Furniture Components",
    ),
    "commercial-and-residential-lighting": (
        "LED Luminaires",
        "Light Panels",
        "LED Strips",
        "Projectors",
        "Pendant Lamps",
        "Recessed Lighting Systems",
        "Industrial Luminaires",
        "Power Supplies",
        "Controllers",
        "Heat Sinks",
        "Optical Modules",
        "Ballasts",
        "Motion Sensors",
        "Reflectors",
        "Metal Structures",
        "Diffusers",
        "Connectors",
        "Housings",
        "Mounting Systems",
        "Emergency Modules",
    ),
    "telecommunications-equipment": (
        "Base Stations",
        "Antennas",
        "Routers",
        "Transmission Modules",
        "Electronic Boards",
        "Cabinets",
        "Fiber Optic Cables",
        "Signal Amplifiers",
        "Power Modules",
        "Converters",
        "Cooling Systems",
        "Racks",
        "Patch Panels",
        "Optical Modules",
        "Redundant Power Supplies",
        "Control Units",
        "Communication Devices",
        "Connectors",
        "Repeaters",
        "Interface Modules",
    ),
    "semiconductors": (
        "Processors",
        "Integrated Chips",
        "Memory Modules",
        "Silicon Wafers",
        "Packages",
        "CMOS Sensors",
        "Integrated Circuits",
        "Power Modules",
        "Converters",
        "Transistors",
        "Diodes",
        "Resistors",
        "Capacitors",
        "Communication Modules",
        "Storage Units",
        "Controllers",
        "Electronic Boards",
        "Heat Sinks",
        "Test Modules",
        "Multi-chip Packages",
    ),
    "scientific-and-measurement-instrumentation": (
        "Pressure Sensors",
        "Flow Transmitters",
        "Gas Analyzers",
        "Spectrometers",
        "Data Acquisition Modules",
        "PID Controllers",
        "Transducers",
        "Digital Indicators",
        "Motorized Valves",
        "Actuators",
        "RTDs",
        "Calibration Modules",
        "Signal Converters",
        "Power Supplies",
        "Recording Systems",
        "Distributed Controllers",
        "Optical Modules",
        "Monitoring Units",
        "Instrumentation Cabinets",
        "Operator Terminals",
    ),
}


def find_option_by_label(label: str) -> IndustryOption | None:
    """Return the industry option whose display label matches exactly."""
    for option in INDUSTRY_OPTIONS:
        if option.label == label:
            return option
    return None


def get_industry_label(industry_key: str) -> str | None:
    for option in INDUSTRY_OPTIONS:
        if option.value == industry_key:
            return option.label
    return None


def sectors_for(industry_key: str) -> tuple[str, ...]:
    """Sector names offered for an industry (empty for unknown keys)."""
    return SECTORS.get(industry_key, ())
