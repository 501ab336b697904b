"""FBAModel and its nested records.

An FBAModel is a compartmentalized metabolic network: compartments,
compounds placed in compartments, reactions over those compounds, biomass
definitions, and records of gap-filling/gap-generation analyses that were
integrated into it.
"""

from __future__ import annotations

from pydantic import Field

from fba_schema.datamodel.base import ConfiguredBaseModel


class BiomassCompound(ConfiguredBaseModel):
    """One compound of a biomass reaction."""

    modelcompound_ref: str
    coefficient: float | None = None


class Biomass(ConfiguredBaseModel):
    """Biomass reaction with macromolecular composition coefficients."""

    id: str
    name: str | None = None
    other: float | None = None
    dna: float | None = None
    rna: float | None = None
    protein: float | None = None
    cellwall: float | None = None
    lipid: float | None = None
    cofactor: float | None = None
    energy: float | None = None
    biomasscompounds: list[BiomassCompound] = Field(default_factory=list)


class ModelCompartment(ConfiguredBaseModel):
    id: str
    compartment_ref: str | None = None
    compartment_index: int | None = Field(default=None, alias="compartmentIndex")
    label: str | None = None
    ph: float | None = Field(default=None, alias="pH")
    potential: float | None = None


class ModelCompound(ConfiguredBaseModel):
    id: str
    compound_ref: str | None = None
    name: str | None = None
    charge: float | None = None
    formula: str | None = None
    modelcompartment_ref: str | None = None


class ModelReactionReagent(ConfiguredBaseModel):
    """Reagent of a reaction. Negative coefficients are consumed, positive produced."""

    modelcompound_ref: str
    coefficient: float | None = None


class ModelReactionProteinSubunit(ConfiguredBaseModel):
    role: str | None = None
    triggering: bool = False
    optional_subunit: bool = Field(default=False, alias="optionalSubunit")
    note: str | None = None
    feature_refs: list[str] = Field(default_factory=list)


class ModelReactionProtein(ConfiguredBaseModel):
    complex_ref: str | None = None
    note: str | None = None
    subunits: list[ModelReactionProteinSubunit] = Field(
        default_factory=list, alias="modelReactionProteinSubunits"
    )


class ModelReaction(ConfiguredBaseModel):
    """Reaction instantiated in a model compartment."""

    id: str
    reaction_ref: str | None = None
    direction: str | None = None
    protons: float | None = None
    modelcompartment_ref: str | None = None
    probability: float | None = None
    reagents: list[ModelReactionReagent] = Field(default_factory=list, alias="modelReactionReagents")
    proteins: list[ModelReactionProtein] = Field(default_factory=list, alias="modelReactionProteins")


class ModelGapfill(ConfiguredBaseModel):
    """Link from a model to a gap-filling analysis run against it."""

    gapfill_id: str
    gapfill_ref: str | None = None
    integrated: bool = False
    integrated_solution: int | None = None
    media_ref: str | None = None


class ModelGapgen(ConfiguredBaseModel):
    """Link from a model to a gap-generation analysis run against it."""

    gapgen_id: str
    gapgen_ref: str | None = None
    integrated: bool = False
    integrated_solution: int | None = None
    media_ref: str | None = None


class FBAModel(ConfiguredBaseModel):
    """Genome-scale metabolic model."""

    id: str
    source: str | None = None
    source_id: str | None = None
    name: str | None = None
    type: str | None = None
    genome_ref: str | None = None
    metagenome_ref: str | None = None
    metagenome_otu_ref: str | None = None
    template_ref: str | None = None

    gapfillings: list[ModelGapfill] = Field(default_factory=list)
    gapgens: list[ModelGapgen] = Field(default_factory=list)

    biomasses: list[Biomass] = Field(default_factory=list)
    modelcompartments: list[ModelCompartment] = Field(default_factory=list)
    modelcompounds: list[ModelCompound] = Field(default_factory=list)
    modelreactions: list[ModelReaction] = Field(default_factory=list)
