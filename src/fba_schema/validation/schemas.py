"""Entity schema descriptors for the metabolic model object graph.

Each entity is declared once as an :class:`EntitySchema`: an ordered list of
:class:`FieldSpec` (wire name, semantic type, reference type or nested
entity, value-domain constraints). The validator walks graphs using only
these descriptors.

Reference types follow the workspace typing conventions:

- absolute references name a whole persisted object
  (``<workspace>/<object>[/<version>]``)
- sub-path references name one element of a list inside a persisted object
  (``<objref>/<list>/id/<element-id>``, with ``~`` as objref for the
  enclosing root object)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RefKind(str, Enum):
    """Kinds of reference strings."""

    ABSOLUTE = "absolute"
    SUBPATH = "subpath"


class FieldType(str, Enum):
    """Semantic types of entity fields."""

    ID = "id"
    STRING = "string"
    FLOAT = "float"
    INT = "int"
    BOOL = "bool"
    REF = "ref"  # single reference string
    REF_LIST = "ref_list"  # list of reference strings
    REF_MAPPING = "ref_mapping"  # reference string -> float
    FLOAT_LIST = "float_list"
    FLOAT_MAPPING = "float_mapping"  # string -> float
    STRING_MAPPING = "string_mapping"  # string -> string
    RECORDS = "records"  # list of nested entities


@dataclass(frozen=True)
class ReferenceType:
    """A named reference typedef.

    Attributes:
        name: Typedef name (e.g., "modelcompartment_ref")
        kind: Absolute or sub-path
        target_type: Workspace type of the referenced object
        list_name: For sub-path references, the list inside the target
    """

    name: str
    kind: RefKind
    target_type: str
    list_name: str | None = None

    @property
    def target(self) -> str:
        """Target as "Type" or "Type.list"."""
        return f"{self.target_type}.{self.list_name}" if self.list_name else self.target_type


@dataclass(frozen=True)
class FieldSpec:
    """Descriptor of one entity field.

    Attributes:
        name: Wire name of the field
        field_type: Semantic type
        ref_type: Reference typedef name, for REF/REF_LIST/REF_MAPPING fields
        entity: Nested entity name, for RECORDS fields
        required: Whether the field must be present
        non_negative: Numeric values (or mapping values) must be >= 0
        value_range: Inclusive (low, high) interval for numeric values
        choices: Allowed values for string fields
    """

    name: str
    field_type: FieldType
    ref_type: str | None = None
    entity: str | None = None
    required: bool = False
    non_negative: bool = False
    value_range: tuple[float, float] | None = None
    choices: tuple[str, ...] | None = None

    @property
    def is_reference(self) -> bool:
        return self.field_type in (FieldType.REF, FieldType.REF_LIST, FieldType.REF_MAPPING)


@dataclass(frozen=True)
class EntitySchema:
    """Descriptor of one entity type.

    Attributes:
        name: Entity name (matches the datamodel class name)
        fields: Ordered field descriptors
        id_field: Name of the field that must be unique within the enclosing list
        type_string: Workspace type, for entities persisted on their own
        bounds: (lower, upper) field pairs that must be ordered
    """

    name: str
    fields: tuple[FieldSpec, ...]
    id_field: str | None = None
    type_string: str | None = None
    bounds: tuple[tuple[str, str], ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def reference_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.is_reference]

    @property
    def record_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.field_type == FieldType.RECORDS]


DIRECTIONS: tuple[str, ...] = ("<", "=", ">")

FBAMODEL_TYPE = "KBaseFBA.FBAModel"


def _absolute(name: str, target_type: str) -> ReferenceType:
    return ReferenceType(name, RefKind.ABSOLUTE, target_type)


def _subpath(name: str, target_type: str, list_name: str) -> ReferenceType:
    return ReferenceType(name, RefKind.SUBPATH, target_type, list_name)


REFERENCE_TYPES: dict[str, ReferenceType] = {
    ref.name: ref
    for ref in (
        # Elements of external objects
        _subpath("compound_ref", "KBaseBiochem.Biochemistry", "compounds"),
        _subpath("reaction_ref", "KBaseBiochem.Biochemistry", "reactions"),
        _subpath("compartment_ref", "KBaseBiochem.Biochemistry", "compartments"),
        _subpath("complex_ref", "KBaseOntology.Mapping", "complexes"),
        _subpath("feature_ref", "KBaseGenomes.Genome", "features"),
        _subpath("metagenome_otu_ref", "KBaseMetagenomes.Metagenome", "otus"),
        # Elements of a model
        _subpath("modelcompartment_ref", FBAMODEL_TYPE, "modelcompartments"),
        _subpath("modelcompound_ref", FBAMODEL_TYPE, "modelcompounds"),
        _subpath("modelreaction_ref", FBAMODEL_TYPE, "modelreactions"),
        _subpath("biomass_ref", FBAMODEL_TYPE, "biomasses"),
        # Whole objects
        _absolute("media_ref", "KBaseBiochem.Media"),
        _absolute("genome_ref", "KBaseGenomes.Genome"),
        _absolute("template_ref", "KBaseFBA.ModelTemplate"),
        _absolute("metagenome_ref", "KBaseMetagenomes.Metagenome"),
        _absolute("mapping_ref", "KBaseOntology.Mapping"),
        _absolute("gapfill_ref", "KBaseFBA.Gapfilling"),
        _absolute("gapgen_ref", "KBaseFBA.Gapgeneration"),
        _absolute("fba_ref", "KBaseFBA.FBA"),
        _absolute("fbamodel_ref", FBAMODEL_TYPE),
        _absolute("regmodel_ref", "KBaseRegulation.RegModel"),
        _absolute("prommodel_ref", "KBaseRegulation.PROMModel"),
        _absolute("probanno_ref", "KBaseProbabilisticAnnotation.ProbAnno"),
        _absolute("phenotypeset_ref", "KBasePhenotypes.PhenotypeSet"),
        _absolute("phenotypesimulationset_ref", "KBasePhenotypes.PhenotypeSimulationSet"),
    )
}


# Field constructors, to keep the tables below readable
def _id(name: str = "id") -> FieldSpec:
    return FieldSpec(name, FieldType.ID, required=True)


def _str(name: str, choices: tuple[str, ...] | None = None) -> FieldSpec:
    return FieldSpec(name, FieldType.STRING, choices=choices)


def _float(
    name: str,
    non_negative: bool = False,
    value_range: tuple[float, float] | None = None,
) -> FieldSpec:
    return FieldSpec(name, FieldType.FLOAT, non_negative=non_negative, value_range=value_range)


def _int(name: str, non_negative: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldType.INT, non_negative=non_negative)


def _bool(name: str) -> FieldSpec:
    return FieldSpec(name, FieldType.BOOL)


def _ref(name: str, ref_type: str | None = None, required: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldType.REF, ref_type=ref_type or name, required=required)


def _refs(name: str, ref_type: str) -> FieldSpec:
    return FieldSpec(name, FieldType.REF_LIST, ref_type=ref_type)


def _ref_map(name: str, ref_type: str, non_negative: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldType.REF_MAPPING, ref_type=ref_type, non_negative=non_negative)


def _records(name: str, entity: str) -> FieldSpec:
    return FieldSpec(name, FieldType.RECORDS, entity=entity)


_BIOMASS_COMPOSITION = ("other", "dna", "rna", "protein", "cellwall", "lipid", "cofactor", "energy")
_TEMPLATE_BIOMASS_COMPOSITION = ("other", "dna", "rna", "protein", "lipid", "cellwall", "cofactor", "energy")


def _variable(ref_name: str, ref_type: str) -> tuple[FieldSpec, ...]:
    return (
        _ref(ref_name, ref_type, required=True),
        _str("variableType"),
        _float("upperBound"),
        _float("lowerBound"),
        _str("class"),
        _float("min"),
        _float("max"),
        _float("value"),
    )


_SCHEMAS: tuple[EntitySchema, ...] = (
    # FBAModel
    EntitySchema(
        "BiomassCompound",
        (_ref("modelcompound_ref", required=True), _float("coefficient")),
    ),
    EntitySchema(
        "Biomass",
        (
            _id(),
            _str("name"),
            *(_float(name) for name in _BIOMASS_COMPOSITION),
            _records("biomasscompounds", "BiomassCompound"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "ModelCompartment",
        (
            _id(),
            _ref("compartment_ref"),
            _int("compartmentIndex"),
            _str("label"),
            _float("pH"),
            _float("potential"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "ModelCompound",
        (
            _id(),
            _ref("compound_ref"),
            _str("name"),
            _float("charge"),
            _str("formula"),
            _ref("modelcompartment_ref"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "ModelReactionReagent",
        (_ref("modelcompound_ref", required=True), _float("coefficient")),
    ),
    EntitySchema(
        "ModelReactionProteinSubunit",
        (
            _str("role"),
            _bool("triggering"),
            _bool("optionalSubunit"),
            _str("note"),
            _refs("feature_refs", "feature_ref"),
        ),
    ),
    EntitySchema(
        "ModelReactionProtein",
        (
            _ref("complex_ref"),
            _str("note"),
            _records("modelReactionProteinSubunits", "ModelReactionProteinSubunit"),
        ),
    ),
    EntitySchema(
        "ModelReaction",
        (
            _id(),
            _ref("reaction_ref"),
            _str("direction", choices=DIRECTIONS),
            _float("protons"),
            _ref("modelcompartment_ref"),
            _float("probability", value_range=(0.0, 1.0)),
            _records("modelReactionReagents", "ModelReactionReagent"),
            _records("modelReactionProteins", "ModelReactionProtein"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "ModelGapfill",
        (
            _id("gapfill_id"),
            _ref("gapfill_ref"),
            _bool("integrated"),
            _int("integrated_solution"),
            _ref("media_ref"),
        ),
        id_field="gapfill_id",
    ),
    EntitySchema(
        "ModelGapgen",
        (
            _id("gapgen_id"),
            _ref("gapgen_ref"),
            _bool("integrated"),
            _int("integrated_solution"),
            _ref("media_ref"),
        ),
        id_field="gapgen_id",
    ),
    EntitySchema(
        "FBAModel",
        (
            _id(),
            _str("source"),
            _str("source_id"),
            _str("name"),
            _str("type"),
            _ref("genome_ref"),
            _ref("metagenome_ref"),
            _ref("metagenome_otu_ref"),
            _ref("template_ref"),
            _records("gapfillings", "ModelGapfill"),
            _records("gapgens", "ModelGapgen"),
            _records("biomasses", "Biomass"),
            _records("modelcompartments", "ModelCompartment"),
            _records("modelcompounds", "ModelCompound"),
            _records("modelreactions", "ModelReaction"),
        ),
        id_field="id",
        type_string=FBAMODEL_TYPE,
    ),
    # FBA
    EntitySchema(
        "FBAConstraint",
        (
            _str("name"),
            _float("rhs"),
            _str("sign", choices=DIRECTIONS),
            _ref_map("compound_terms", "modelcompound_ref"),
            _ref_map("reaction_terms", "modelreaction_ref"),
        ),
    ),
    EntitySchema(
        "FBAReactionBound",
        (
            _ref("modelreaction_ref", required=True),
            _str("variableType"),
            _float("upperBound"),
            _float("lowerBound"),
        ),
        bounds=(("lowerBound", "upperBound"),),
    ),
    EntitySchema(
        "FBACompoundBound",
        (
            _ref("modelcompound_ref", required=True),
            _str("variableType"),
            _float("upperBound"),
            _float("lowerBound"),
        ),
        bounds=(("lowerBound", "upperBound"),),
    ),
    EntitySchema(
        "FBACompoundVariable",
        _variable("modelcompound_ref", "modelcompound_ref"),
        bounds=(("lowerBound", "upperBound"),),
    ),
    EntitySchema(
        "FBAReactionVariable",
        _variable("modelreaction_ref", "modelreaction_ref"),
        bounds=(("lowerBound", "upperBound"),),
    ),
    EntitySchema(
        "FBABiomassVariable",
        _variable("biomass_ref", "biomass_ref"),
        bounds=(("lowerBound", "upperBound"),),
    ),
    EntitySchema(
        "FBAPromResult",
        (_float("objectFraction"), _float("alpha"), _float("beta")),
    ),
    EntitySchema(
        "FBADeletionResult",
        (_refs("feature_refs", "feature_ref"), _float("growthFraction")),
    ),
    EntitySchema(
        "FBAMinimalMediaResult",
        (
            _refs("essentialNutrient_refs", "compound_ref"),
            _refs("optionalNutrient_refs", "compound_ref"),
        ),
    ),
    EntitySchema(
        "FBAMetaboliteProductionResult",
        (_ref("modelcompound_ref", required=True), _float("maximumProduction")),
    ),
    EntitySchema(
        "FBA",
        (
            _id(),
            _bool("fva"),
            _bool("fluxMinimization"),
            _bool("findMinimalMedia"),
            _bool("allReversible"),
            _bool("simpleThermoConstraints"),
            _bool("thermodynamicConstraints"),
            _bool("noErrorThermodynamicConstraints"),
            _bool("minimizeErrorThermodynamicConstraints"),
            _bool("maximizeObjective"),
            _ref_map("compoundflux_objterms", "modelcompound_ref"),
            _ref_map("reactionflux_objterms", "modelreaction_ref"),
            _ref_map("biomassflux_objterms", "biomass_ref"),
            _int("comboDeletions", non_negative=True),
            _int("numberOfSolutions", non_negative=True),
            _float("objectiveConstraintFraction"),
            _float("defaultMaxFlux"),
            _float("defaultMaxDrainFlux"),
            _float("defaultMinDrainFlux"),
            _float("PROMKappa"),
            _bool("decomposeReversibleFlux"),
            _bool("decomposeReversibleDrainFlux"),
            _bool("fluxUseVariables"),
            _bool("drainfluxUseVariables"),
            _ref("regmodel_ref"),
            _ref("fbamodel_ref"),
            _ref("prommodel_ref"),
            _ref("media_ref"),
            _ref("phenotypeset_ref"),
            _refs("geneKO_refs", "feature_ref"),
            _refs("reactionKO_refs", "modelreaction_ref"),
            _refs("additionalCpd_refs", "compound_ref"),
            FieldSpec("uptakeLimits", FieldType.FLOAT_MAPPING),
            FieldSpec("parameters", FieldType.STRING_MAPPING),
            FieldSpec("inputfiles", FieldType.STRING_MAPPING),
            _records("FBAConstraints", "FBAConstraint"),
            _records("FBAReactionBounds", "FBAReactionBound"),
            _records("FBACompoundBounds", "FBACompoundBound"),
            _float("objectiveValue"),
            FieldSpec("outputfiles", FieldType.STRING_MAPPING),
            _ref("phenotypesimulationset_ref"),
            _records("FBACompoundVariables", "FBACompoundVariable"),
            _records("FBAReactionVariables", "FBAReactionVariable"),
            _records("FBABiomassVariables", "FBABiomassVariable"),
            _records("FBAPromResults", "FBAPromResult"),
            _records("FBADeletionResults", "FBADeletionResult"),
            _records("FBAMinimalMediaResults", "FBAMinimalMediaResult"),
            _records("FBAMetaboliteProductionResults", "FBAMetaboliteProductionResult"),
        ),
        id_field="id",
        type_string="KBaseFBA.FBA",
    ),
    # Gap generation
    EntitySchema(
        "GapgenerationSolutionReaction",
        (_ref("modelreaction_ref"), _str("direction", choices=DIRECTIONS)),
    ),
    EntitySchema(
        "GapgenerationSolution",
        (
            _id(),
            _float("solutionCost", non_negative=True),
            _refs("biomassSuppplement_refs", "modelcompound_ref"),
            _refs("mediaRemoval_refs", "modelcompound_ref"),
            _refs("additionalKO_refs", "modelreaction_ref"),
            _bool("integrated"),
            _bool("suboptimal"),
            _records("gapgenSolutionReactions", "GapgenerationSolutionReaction"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "Gapgeneration",
        (
            _id(),
            _ref("fba_ref"),
            _ref("fbamodel_ref"),
            _bool("mediaHypothesis"),
            _bool("biomassHypothesis"),
            _bool("gprHypothesis"),
            _bool("reactionRemovalHypothesis"),
            _ref("media_ref"),
            _ref("referenceMedia_ref", "media_ref"),
            _int("timePerSolution", non_negative=True),
            _int("totalTimeLimit", non_negative=True),
            _records("gapgenSolutions", "GapgenerationSolution"),
        ),
        id_field="id",
        type_string="KBaseFBA.Gapgeneration",
    ),
    # Gap filling
    EntitySchema(
        "GapfillingReaction",
        (
            _ref("reaction_ref"),
            _ref("compartment_ref"),
            _str("direction", choices=DIRECTIONS),
            _refs("candidateFeature_refs", "feature_ref"),
        ),
    ),
    EntitySchema(
        "GapfillingSolution",
        (
            _id(),
            _float("solutionCost", non_negative=True),
            _refs("biomassRemoval_refs", "modelcompound_ref"),
            _refs("mediaSupplement_refs", "modelcompound_ref"),
            _refs("koRestore_refs", "modelreaction_ref"),
            _bool("integrated"),
            _bool("suboptimal"),
            _records("gapfillingSolutionReactions", "GapfillingReaction"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "Gapfilling",
        (
            _id(),
            _ref("fba_ref"),
            _ref("media_ref"),
            _ref("fbamodel_ref"),
            _ref("probanno_ref"),
            _bool("mediaHypothesis"),
            _bool("biomassHypothesis"),
            _bool("gprHypothesis"),
            _bool("reactionAdditionHypothesis"),
            _bool("balancedReactionsOnly"),
            _bool("completeGapfill"),
            _refs("guaranteedReaction_refs", "reaction_ref"),
            _refs("targetedreaction_refs", "reaction_ref"),
            _refs("blacklistedReaction_refs", "reaction_ref"),
            _refs("allowableCompartment_refs", "compartment_ref"),
            _float("reactionActivationBonus"),
            _float("drainFluxMultiplier", non_negative=True),
            _float("directionalityMultiplier", non_negative=True),
            _float("deltaGMultiplier", non_negative=True),
            _float("noStructureMultiplier", non_negative=True),
            _float("noDeltaGMultiplier", non_negative=True),
            _float("biomassTransporterMultiplier", non_negative=True),
            _float("singleTransporterMultiplier", non_negative=True),
            _float("transporterMultiplier", non_negative=True),
            _int("timePerSolution", non_negative=True),
            _int("totalTimeLimit", non_negative=True),
            _ref_map("reactionMultipliers", "reaction_ref", non_negative=True),
            _records("gapfillingSolutions", "GapfillingSolution"),
        ),
        id_field="id",
        type_string="KBaseFBA.Gapfilling",
    ),
    # Templates
    EntitySchema(
        "TemplateBiomassComponent",
        (
            _id(),
            _str("class"),
            _ref("compound_ref"),
            _ref("compartment_ref"),
            _str("coefficientType"),
            _float("coefficient"),
            _refs("linked_compound_refs", "compound_ref"),
            FieldSpec("link_coefficients", FieldType.FLOAT_LIST),
        ),
        id_field="id",
    ),
    EntitySchema(
        "TemplateBiomass",
        (
            _id(),
            _str("name"),
            _str("type"),
            *(_float(name) for name in _TEMPLATE_BIOMASS_COMPOSITION),
            _records("templateBiomassComponents", "TemplateBiomassComponent"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "TemplateReaction",
        (
            _id(),
            _ref("reaction_ref"),
            _ref("compartment_ref"),
            _refs("complex_refs", "complex_ref"),
            _str("direction", choices=DIRECTIONS),
            _str("type"),
        ),
        id_field="id",
    ),
    EntitySchema(
        "ModelTemplate",
        (
            _id(),
            _str("name"),
            _str("modelType"),
            _str("domain"),
            _ref("mapping_ref"),
            _records("templateReactions", "TemplateReaction"),
            _records("templateBiomasses", "TemplateBiomass"),
        ),
        id_field="id",
        type_string="KBaseFBA.ModelTemplate",
    ),
)

ENTITY_SCHEMAS: dict[str, EntitySchema] = {schema.name: schema for schema in _SCHEMAS}

ROOT_ENTITIES: tuple[str, ...] = tuple(s.name for s in _SCHEMAS if s.type_string is not None)


def get_entity_schema(name: str) -> EntitySchema:
    """Get the schema descriptor for an entity.

    Raises:
        KeyError: If no entity of that name is declared
    """
    try:
        return ENTITY_SCHEMAS[name]
    except KeyError:
        raise KeyError(f"Unknown entity: {name}. Available: {list(ENTITY_SCHEMAS)}") from None


def get_reference_type(name: str) -> ReferenceType:
    """Get a reference typedef by name."""
    return REFERENCE_TYPES[name]


def list_entities() -> list[str]:
    """List all declared entity names."""
    return list(ENTITY_SCHEMAS.keys())


def list_reference_fields(entity: str) -> list[str]:
    """List the reference-typed fields of an entity."""
    return [f.name for f in get_entity_schema(entity).reference_fields]
