"""Reconstruction templates: how a model is built from an annotation."""

from __future__ import annotations

from pydantic import Field

from fba_schema.datamodel.base import ConfiguredBaseModel


class TemplateBiomassComponent(ConfiguredBaseModel):
    id: str
    component_class: str | None = Field(default=None, alias="class")
    compound_ref: str | None = None
    compartment_ref: str | None = None
    coefficient_type: str | None = Field(default=None, alias="coefficientType")
    coefficient: float | None = None
    linked_compound_refs: list[str] = Field(default_factory=list)
    link_coefficients: list[float] = Field(default_factory=list)


class TemplateBiomass(ConfiguredBaseModel):
    id: str
    name: str | None = None
    type: str | None = None
    other: float | None = None
    dna: float | None = None
    rna: float | None = None
    protein: float | None = None
    lipid: float | None = None
    cellwall: float | None = None
    cofactor: float | None = None
    energy: float | None = None
    components: list[TemplateBiomassComponent] = Field(default_factory=list, alias="templateBiomassComponents")


class TemplateReaction(ConfiguredBaseModel):
    id: str
    reaction_ref: str | None = None
    compartment_ref: str | None = None
    complex_refs: list[str] = Field(default_factory=list)
    direction: str | None = None
    type: str | None = None


class ModelTemplate(ConfiguredBaseModel):
    """Template mapping annotated functions to reactions and biomass."""

    id: str
    name: str | None = None
    model_type: str | None = Field(default=None, alias="modelType")
    domain: str | None = None
    mapping_ref: str | None = None

    reactions: list[TemplateReaction] = Field(default_factory=list, alias="templateReactions")
    biomasses: list[TemplateBiomass] = Field(default_factory=list, alias="templateBiomasses")
