"""Tests for the shape catalog."""
import pytest

from polycube.geometry.catalog import (
    SHAPE_DEFINITIONS,
    ShapeCatalogError,
    ShapeDefinition,
    ShapeType,
    UnknownShapeType,
    lookup,
    validate_catalog,
)


class TestLookup:

    def test_every_type_has_a_definition(self):
        for shape_type in ShapeType:
            assert lookup(shape_type).type is shape_type

    def test_lookup_by_string_tag(self):
        assert lookup("l-shape-short").type is ShapeType.L_SHORT

    def test_unknown_tag_is_fatal(self):
        with pytest.raises(UnknownShapeType):
            lookup("hexagon")

    def test_unknown_shape_type_is_a_value_error(self):
        assert issubclass(UnknownShapeType, ShapeCatalogError)
        assert issubclass(ShapeCatalogError, ValueError)

    @pytest.mark.parametrize("shape_type,count", [
        (ShapeType.CUBE, 1),
        (ShapeType.CUBOID_1X1X2, 2),
        (ShapeType.CUBOID_1X1X3, 3),
        (ShapeType.L_SHORT, 3),
        (ShapeType.L_LONG, 4),
        (ShapeType.T_SHORT, 4),
        (ShapeType.T_LONG, 5),
    ])
    def test_block_counts(self, shape_type, count):
        assert len(lookup(shape_type)) == count

    def test_l_short_blocks(self):
        assert set(lookup(ShapeType.L_SHORT).blocks) == {(0, 1, 0), (0, 0, 0), (1, 0, 0)}

    def test_definitions_are_immutable(self):
        definition = lookup(ShapeType.CUBE)
        with pytest.raises(AttributeError):
            definition.blocks = ((5, 5, 5),)


class TestValidateCatalog:

    def test_builtin_table_is_valid(self):
        table = validate_catalog(SHAPE_DEFINITIONS)
        assert len(table) == 7

    def test_empty_block_list(self):
        broken = list(SHAPE_DEFINITIONS[1:]) + [ShapeDefinition(ShapeType.CUBE, "Cube", ())]
        with pytest.raises(ShapeCatalogError, match="no blocks"):
            validate_catalog(broken)

    def test_duplicate_block(self):
        broken = list(SHAPE_DEFINITIONS[1:]) + [
            ShapeDefinition(ShapeType.CUBE, "Cube", ((0, 0, 0), (0, 0, 0)))
        ]
        with pytest.raises(ShapeCatalogError, match="repeats"):
            validate_catalog(broken)

    def test_duplicate_type(self):
        with pytest.raises(ShapeCatalogError, match="twice"):
            validate_catalog(list(SHAPE_DEFINITIONS) + [SHAPE_DEFINITIONS[0]])

    def test_missing_type(self):
        with pytest.raises(ShapeCatalogError, match="No definition"):
            validate_catalog(SHAPE_DEFINITIONS[:-1])
