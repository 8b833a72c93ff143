"""Bundled dataset for first-use experience.

A curated map of the stablecoin ecosystem: issuers, custodians,
exchanges, surveillance vendors, regulators and the people who move
between them, plus the ``bitcoin-protocol`` reference node every
path-to-center query measures against.

Entities without a ``decentralizationScore`` fall back to the default
score for their type. A few connections deliberately point at ids that
are not in the dataset, so dangling references are exercised too.
"""

from __future__ import annotations

import copy
from typing import Any

# ---------------------------------------------------------------------------
# Structure (abridged):
#
#   USDT ── issued by → Tether Limited ── treasury custodian → Cantor Fitzgerald
#     │                      └── direct system access ← FBI
#     └── primary trading venue → Binance
#   USDC ── issued by → Circle ── direct partnership → US Treasury
#     └── reporting pipeline → FinCEN
#   DAI ── significant collateral → USDC
#   Self-Custody ── enables → Bitcoin Protocol ← threatened by ── CBDC
# ---------------------------------------------------------------------------

_DEMO_ENTITIES: list[dict[str, Any]] = [
    # --- Reference node ---
    {
        "id": "bitcoin-protocol",
        "name": "Bitcoin Protocol",
        "type": "concept",
        "decentralizationScore": 100,
        "description": "Permissionless settlement network with no issuer and no custodian.",
        "connections": [
            {"targetId": "self-custody", "targetName": "Self-Custody", "relationship": "enables"},
            {"targetId": "cbdc", "targetName": "CBDC", "relationship": "threatened by"},
        ],
    },
    {
        "id": "self-custody",
        "name": "Self-Custody",
        "type": "concept",
        "decentralizationScore": 100,
        "description": "Holding your own keys. No intermediary can freeze or seize funds.",
        "connections": [
            {"targetId": "bitcoin-protocol", "targetName": "Bitcoin Protocol", "relationship": "enables"},
            {"targetId": "programmable-money", "targetName": "Programmable Money", "relationship": "threatened by"},
        ],
    },
    # --- Stablecoins ---
    {
        "id": "usdt",
        "name": "USDT (Tether)",
        "type": "stablecoin",
        "decentralizationScore": 10,
        "description": "Largest stablecoin. ~$100B+ in circulation.",
        "captureStory": (
            "Tether can freeze any address on request and holds its reserves "
            "with a single politically connected custodian."
        ),
        "scoreBreakdown": {"custody": 5, "governance": 10, "censorship": 5},
        "connections": [
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "issued by"},
            {"targetId": "cantor-fitzgerald", "targetName": "Cantor Fitzgerald", "relationship": "treasury custodian"},
            {"targetId": "fbi", "targetName": "FBI", "relationship": "direct system access"},
            {"targetId": "chainalysis", "targetName": "Chainalysis", "relationship": "surveillance partner"},
            {"targetId": "binance", "targetName": "Binance", "relationship": "primary trading venue"},
        ],
    },
    {
        "id": "usdc",
        "name": "USDC",
        "type": "stablecoin",
        "decentralizationScore": 15,
        "description": "Second largest stablecoin. ~$25B+. US-regulated.",
        "connections": [
            {"targetId": "circle", "targetName": "Circle", "relationship": "issued by"},
            {"targetId": "blackrock", "targetName": "BlackRock", "relationship": "major investor"},
            {"targetId": "coinbase", "targetName": "Coinbase", "relationship": "co-creator"},
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "direct partnership"},
            {"targetId": "fincen", "targetName": "FinCEN", "relationship": "reporting pipeline"},
        ],
    },
    {
        "id": "dai",
        "name": "DAI",
        "type": "stablecoin",
        "decentralizationScore": 45,
        "description": '"Decentralized" stablecoin. ~$5B. Crypto-collateralized.',
        "connections": [
            {"targetId": "usdc", "targetName": "USDC", "relationship": "significant collateral"},
            {"targetId": "dollar-hegemony", "targetName": "Dollar Hegemony", "relationship": "still pegged to USD"},
            {"targetId": "self-custody", "targetName": "Self-Custody", "relationship": "can be self-custodied"},
        ],
    },
    {
        "id": "busd",
        "name": "BUSD",
        "type": "stablecoin",
        "decentralizationScore": 5,
        "description": "Binance USD. Discontinued by regulatory order.",
        "connections": [
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "was issued by"},
            {"targetId": "binance", "targetName": "Binance", "relationship": "branded by"},
            {"targetId": "sec", "targetName": "SEC", "relationship": "killed it"},
        ],
    },
    {
        "id": "pyusd",
        "name": "PYUSD",
        "type": "stablecoin",
        "description": "PayPal's stablecoin.",
        "connections": [
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "issued by"},
            {"targetId": "paypal", "targetName": "PayPal", "relationship": "branded by"},
        ],
    },
    # --- Organizations ---
    {
        "id": "tether-limited",
        "name": "Tether Limited",
        "type": "organization",
        "decentralizationScore": 10,
        "description": "Issues USDT. British Virgin Islands.",
        "connections": [
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "issues"},
            {"targetId": "paolo-ardoino", "targetName": "Paolo Ardoino", "relationship": "CTO"},
            {"targetId": "cantor-fitzgerald", "targetName": "Cantor Fitzgerald", "relationship": "treasury custodian"},
            {"targetId": "fbi", "targetName": "FBI", "relationship": "onboarded directly"},
        ],
    },
    {
        "id": "circle",
        "name": "Circle",
        "type": "organization",
        "decentralizationScore": 15,
        "description": "Issues USDC. US-based, regulated.",
        "connections": [
            {"targetId": "usdc", "targetName": "USDC", "relationship": "issues"},
            {"targetId": "jeremy-allaire", "targetName": "Jeremy Allaire", "relationship": "CEO"},
            {"targetId": "blackrock", "targetName": "BlackRock", "relationship": "investor"},
            {"targetId": "coinbase", "targetName": "Coinbase", "relationship": "co-creator"},
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "direct partnership"},
        ],
    },
    {
        "id": "paxos",
        "name": "Paxos",
        "type": "organization",
        "description": "Regulated stablecoin issuer. White-label model.",
        "connections": [
            {"targetId": "charles-cascarilla", "targetName": "Charles Cascarilla", "relationship": "CEO"},
            {"targetId": "pyusd", "targetName": "PYUSD", "relationship": "issues for PayPal"},
            {"targetId": "busd", "targetName": "BUSD", "relationship": "issued (discontinued)"},
            {"targetId": "peter-thiel", "targetName": "Peter Thiel", "relationship": "investor"},
        ],
    },
    {
        "id": "cantor-fitzgerald",
        "name": "Cantor Fitzgerald",
        "type": "organization",
        "decentralizationScore": 10,
        "description": "Financial services firm. Primary custodian for Tether reserves.",
        "connections": [
            {"targetId": "howard-lutnick", "targetName": "Howard Lutnick", "relationship": "CEO"},
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "holds their treasury"},
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "custodies backing"},
        ],
    },
    {
        "id": "blackrock",
        "name": "BlackRock",
        "type": "organization",
        "decentralizationScore": 5,
        "description": "World's largest asset manager. ~$12 trillion AUM.",
        "connections": [
            {"targetId": "larry-fink", "targetName": "Larry Fink", "relationship": "CEO"},
            {"targetId": "circle", "targetName": "Circle", "relationship": "major investor"},
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "advisory role"},
            {"targetId": "federal-reserve", "targetName": "Federal Reserve", "relationship": "crisis manager"},
        ],
    },
    {
        "id": "jp-morgan",
        "name": "JP Morgan",
        "type": "organization",
        "decentralizationScore": 5,
        "description": "Largest US bank.",
        "connections": [
            {"targetId": "federal-reserve", "targetName": "Federal Reserve", "relationship": "primary dealer"},
            {"targetId": "blackrock", "targetName": "BlackRock", "relationship": "intertwined"},
        ],
    },
    {
        "id": "coinbase",
        "name": "Coinbase",
        "type": "organization",
        "description": "Largest US crypto exchange.",
        "connections": [
            {"targetId": "usdc", "targetName": "USDC", "relationship": "co-creator"},
            {"targetId": "circle", "targetName": "Circle", "relationship": "partner"},
            {"targetId": "chainalysis", "targetName": "Chainalysis", "relationship": "surveillance partner"},
        ],
    },
    {
        "id": "binance",
        "name": "Binance",
        "type": "organization",
        "description": "World's largest crypto exchange by volume.",
        "connections": [
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "primary stablecoin"},
            {"targetId": "busd", "targetName": "BUSD", "relationship": "was branded by"},
        ],
    },
    {
        "id": "chainalysis",
        "name": "Chainalysis",
        "type": "organization",
        "decentralizationScore": 5,
        "description": "Blockchain analytics and surveillance company.",
        "connections": [
            {"targetId": "fbi", "targetName": "FBI", "relationship": "major client"},
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "partner"},
            {"targetId": "circle", "targetName": "Circle", "relationship": "partner"},
        ],
    },
    {
        "id": "strategy",
        "name": "Strategy (MicroStrategy)",
        "type": "organization",
        "decentralizationScore": 45,
        "description": "Largest corporate Bitcoin holder.",
        "connections": [
            {"targetId": "michael-saylor", "targetName": "Michael Saylor", "relationship": "founder"},
            {"targetId": "bitcoin-protocol", "targetName": "Bitcoin Protocol", "relationship": "largest corporate holder"},
        ],
    },
    # --- Government ---
    {
        "id": "fbi",
        "name": "FBI",
        "type": "government",
        "description": "Federal Bureau of Investigation.",
        "connections": [
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "direct system access"},
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "can request freezes"},
        ],
    },
    {
        "id": "us-treasury",
        "name": "US Treasury",
        "type": "government",
        "description": "Issues US debt. Benefits from stablecoin demand.",
        "connections": [
            {"targetId": "circle", "targetName": "Circle", "relationship": "direct partnership"},
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "major treasury buyer"},
            {"targetId": "fincen", "targetName": "FinCEN", "relationship": "bureau"},
        ],
    },
    {
        "id": "federal-reserve",
        "name": "Federal Reserve",
        "type": "government",
        "description": "US central bank. Not directly issuing CBDC.",
        "connections": [
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "coordinates policy"},
            {"targetId": "cbdc", "targetName": "CBDC", "relationship": "researches"},
        ],
    },
    {
        "id": "sec",
        "name": "SEC",
        "type": "government",
        "description": "Securities and Exchange Commission.",
        "connections": [
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "Wells notice for BUSD"},
            {"targetId": "coinbase", "targetName": "Coinbase", "relationship": "lawsuit"},
        ],
    },
    {
        "id": "fincen",
        "name": "FinCEN",
        "type": "government",
        "description": "Financial Crimes Enforcement Network.",
        "connections": [
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "parent agency"},
            {"targetId": "circle", "targetName": "Circle", "relationship": "direct reporting pipeline"},
        ],
    },
    # --- People ---
    {
        "id": "howard-lutnick",
        "name": "Howard Lutnick",
        "type": "person",
        "decentralizationScore": 10,
        "description": "CEO of Cantor Fitzgerald. Commerce Secretary nominee.",
        "connections": [
            {"targetId": "cantor-fitzgerald", "targetName": "Cantor Fitzgerald", "relationship": "CEO"},
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "custodies their treasury"},
        ],
    },
    {
        "id": "paolo-ardoino",
        "name": "Paolo Ardoino",
        "type": "person",
        "description": "CTO of Tether and Bitfinex.",
        "connections": [
            {"targetId": "tether-limited", "targetName": "Tether Limited", "relationship": "CTO"},
            {"targetId": "fbi", "targetName": "FBI", "relationship": "implemented access"},
        ],
    },
    {
        "id": "jeremy-allaire",
        "name": "Jeremy Allaire",
        "type": "person",
        "description": "CEO of Circle.",
        "connections": [
            {"targetId": "circle", "targetName": "Circle", "relationship": "CEO"},
            {"targetId": "usdc", "targetName": "USDC", "relationship": "creator"},
        ],
    },
    {
        "id": "charles-cascarilla",
        "name": "Charles Cascarilla",
        "type": "person",
        "description": "CEO of Paxos.",
        "connections": [
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "CEO"},
            {"targetId": "congressional-hearing", "targetName": "Congressional Hearing (March 2025)", "relationship": "testified"},
        ],
    },
    {
        "id": "larry-fink",
        "name": "Larry Fink",
        "type": "person",
        "description": "CEO of BlackRock.",
        "connections": [
            {"targetId": "blackrock", "targetName": "BlackRock", "relationship": "CEO"},
        ],
    },
    {
        "id": "peter-thiel",
        "name": "Peter Thiel",
        "type": "person",
        "description": "PayPal co-founder. Palantir founder.",
        "connections": [
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "investor"},
            {"targetId": "palantir", "targetName": "Palantir", "relationship": "founder"},
        ],
    },
    {
        "id": "michael-saylor",
        "name": "Michael Saylor",
        "type": "person",
        "decentralizationScore": 55,
        "description": "Founder of Strategy. Largest corporate Bitcoin holder.",
        "connections": [
            {"targetId": "strategy", "targetName": "Strategy (MicroStrategy)", "relationship": "founder"},
        ],
    },
    # --- Concepts ---
    {
        "id": "dollar-hegemony",
        "name": "Dollar Hegemony",
        "type": "concept",
        "decentralizationScore": 10,
        "description": "US dollar's dominance as world reserve currency.",
        "connections": [
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "issues the debt"},
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "extends dollar globally"},
        ],
    },
    {
        "id": "cbdc",
        "name": "CBDC",
        "type": "concept",
        "decentralizationScore": 0,
        "description": "Central Bank Digital Currency. Government-issued digital money.",
        "connections": [
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "has same capabilities"},
            {"targetId": "programmable-money", "targetName": "Programmable Money", "relationship": "feared feature"},
        ],
    },
    {
        "id": "programmable-money",
        "name": "Programmable Money",
        "type": "concept",
        "decentralizationScore": 10,
        "description": "Money with built-in rules and restrictions.",
        "connections": [
            {"targetId": "usdt", "targetName": "USDT (Tether)", "relationship": "can freeze/blacklist"},
            {"targetId": "usdc", "targetName": "USDC", "relationship": "can freeze/blacklist"},
        ],
    },
    # --- Events ---
    {
        "id": "tornado-cash-sanctions",
        "name": "Tornado Cash Sanctions (2022)",
        "type": "event",
        "description": "US Treasury sanctioned Tornado Cash. USDC froze $65M+.",
        "connections": [
            {"targetId": "us-treasury", "targetName": "US Treasury", "relationship": "issued sanctions"},
            {"targetId": "usdc", "targetName": "USDC", "relationship": "froze funds instantly"},
        ],
        "metadata": {"date": "2022-08"},
    },
    {
        "id": "congressional-hearing",
        "name": "Congressional Hearing (March 2025)",
        "type": "event",
        "description": "US Congressional hearing on stablecoins.",
        "connections": [
            {"targetId": "charles-cascarilla", "targetName": "Charles Cascarilla", "relationship": "testified"},
            {"targetId": "paxos", "targetName": "Paxos", "relationship": "CEO testified"},
        ],
        "metadata": {"date": "2025-03"},
    },
]


def get_demo_entities() -> list[dict[str, Any]]:
    """Return a deep copy of the bundled entity records."""
    return copy.deepcopy(_DEMO_ENTITIES)
