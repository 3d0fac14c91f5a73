"""
Curated Factor Table — Hand-maintained descriptors for ids missing from the reference dataset.

Covers legacy and alternate ids still returned by the screening source.
Consulted only when the reference lookup misses.
"""

from __future__ import annotations

CURATED_FACTORS: dict[str, dict[str, str]] = {
    # Sanctions & export controls
    "psa_owned_by_sanctioned_eu_ec_sanctions_map_entity": {
        "label": "Controlled by EU Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by an entity on EU sanctions lists",
        "type": "psa",
    },
    "psa_owned_by_sanctioned_usa_ofac_sdn_entity": {
        "label": "Controlled by OFAC SDN Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by an OFAC Specially Designated National",
        "type": "psa",
    },
    "psa_owned_by_usa_bis_entity": {
        "label": "Controlled by BIS Listed Entity",
        "category": "export_controls",
        "severity": "critical",
        "description": "Entity is owned or controlled by a US Bureau of Industry and Security listed entity",
        "type": "psa",
    },
    "psa_usa_bis_50_percent_rule": {
        "label": "Subject to 50% Rule (BIS)",
        "category": "export_controls",
        "severity": "critical",
        "description": "Entity meets the 50% ownership rule for BIS sanctions compliance",
        "type": "psa",
    },
    "psa_owned_by_sanctioned_nzl_mfat_rus_entity": {
        "label": "Controlled by NZ MFAT Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by a New Zealand MFAT sanctioned Russian entity",
    },
    "psa_owned_by_sanctioned_eu_dg_fisma_ec_entity": {
        "label": "Controlled by EU DG FISMA Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by an EU DG FISMA sanctioned entity",
    },
    "psa_owned_by_entity_in_export_controls": {
        "label": "Controlled by Export Control Listed Entity",
        "category": "export_controls",
        "severity": "high",
        "description": "Entity is owned or controlled by an entity subject to export controls",
        "type": "psa",
    },
    "owned_by_sanctioned_can_gac_entity": {
        "label": "Controlled by Canadian Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by a Canadian Global Affairs sanctioned entity",
    },
    "owned_by_sanctioned_ukr_nsdc_entity": {
        "label": "Controlled by Ukrainian NSDC Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity is owned or controlled by a Ukrainian NSDC sanctioned entity",
    },
    "owned_by_sanctioned_eu_ec_sanctions_map_entity": {
        "label": "Connected to EU Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity has ownership connections to EU sanctioned entities",
    },
    "owned_by_sanctioned_nzl_mfat_rus_entity": {
        "label": "Connected to NZ Sanctioned Entity",
        "category": "sanctions",
        "severity": "critical",
        "description": "Entity has connections to New Zealand MFAT sanctioned Russian entities",
    },
    # Network adjacency
    "ofac_sdn_adjacent": {
        "label": "Adjacent to USA OFAC SDN",
        "category": "sanctions",
        "severity": "elevated",
        "level": "Elevated",
        "description": "The entity is 1 hop away from entities currently subject to sanctions in the USA OFAC SDN Sanctions List.",
        "type": "network",
    },
    "ofac_sdn_mex_dto_sanctioned_adjacent": {
        "label": "Adjacent to Mexico Drug Trafficking OFAC Entity",
        "category": "sanctions",
        "severity": "elevated",
        "level": "Elevated",
        "description": "Entity is 1 hop away from Mexico Drug Trafficking OFAC SDN entities",
        "type": "network",
    },
    "psa_ofac_sdn_mex_dto_sanctioned_adjacent": {
        "label": "Adjacent to Mexico Drug Trafficking OFAC Entity (PSA)",
        "category": "sanctions",
        "severity": "elevated",
        "level": "Elevated",
        "description": "Entity is connected to Mexico Drug Trafficking OFAC SDN entities through ownership",
        "type": "network",
    },
    # Political exposure
    "pep_family": {
        "label": "PEP Family Member",
        "category": "political_exposure",
        "severity": "high",
        "description": "Individual is a family member of a politically exposed person",
    },
    "pep_associate": {
        "label": "PEP Associate",
        "category": "political_exposure",
        "severity": "elevated",
        "description": "Individual is a known associate of a politically exposed person",
    },
    "pep_head_of_state": {
        "label": "Head of State",
        "category": "political_exposure",
        "severity": "high",
        "level": "High",
        "description": "The individual is a head of state or government.",
        "type": "seed",
    },
    "pep_government_minister": {
        "label": "Government Minister",
        "category": "political_exposure",
        "severity": "high",
        "level": "High",
        "description": "The individual is a government minister or senior official.",
        "type": "seed",
    },
    # Regulatory
    "export_control_violation": {
        "label": "Export Control Violation",
        "category": "regulatory_action",
        "severity": "high",
        "description": "Violated export control regulations",
    },
    # Adverse media
    "adverse_media": {
        "label": "Adverse Media Coverage",
        "category": "adverse_media",
        "severity": "elevated",
        "description": "Negative media coverage or reports",
    },
    "reputation_risk": {
        "label": "Reputational Risk",
        "category": "adverse_media",
        "severity": "elevated",
        "description": "General reputational risk concerns",
    },
    "unknown": {
        "label": "Unknown Risk Factor",
        "category": "relevant",
        "severity": "elevated",
        "description": "Risk factor not yet categorized",
    },
}
