import random

import numpy as np
import pytest

from core.vector import Vector3, Color
from geometry.sphere import Sphere
from materials.material import Material
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.dielectric import Dielectric
from scenes.random_scene import random_scene
from scenes.export import (
    MaterialType, MaterialRef, build_scene_tables, resolve_material_ref, format_scene_tables,
    write_scene_tables,
)


class Glow(Material):
    """A material the exporter has no table for."""
    def scatter(self, ray_in, rec, rng=random):
        return None


def expected_row(material):
    if isinstance(material, Lambertian):
        return MaterialType.LAMBERTIAN, tuple(material.albedo)
    if isinstance(material, Metal):
        if material.fuzz == 0:
            return MaterialType.MIRROR, tuple(material.albedo)
        return MaterialType.METAL, tuple(material.albedo) + (material.fuzz,)
    return MaterialType.DIELECTRIC, (1.0, 1.0, 1.0, material.ir)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_every_reference_resolves_to_its_material(seed):
    _, spheres = random_scene(random.Random(seed), {'grid_step': 1})
    tables = build_scene_tables(spheres)
    assert len(tables.spheres) == len(spheres)
    assert len(tables.material_refs) == len(spheres)
    for sphere, geometry, ref in zip(spheres, tables.spheres, tables.material_refs):
        c = sphere.center
        assert geometry == (c.x, c.y, c.z, sphere.radius)
        kind, row = expected_row(sphere.material)
        assert ref.kind is kind
        assert resolve_material_ref(tables, ref) == row


def test_indices_count_previous_entries_of_same_kind():
    spheres = [
        Sphere(Vector3(0, 0, 0), 1, Lambertian(Color(0.1, 0.1, 0.1))),
        Sphere(Vector3(1, 0, 0), 1, Metal(Color(0.9, 0.9, 0.9), 0.3)),
        Sphere(Vector3(2, 0, 0), 1, Lambertian(Color(0.2, 0.2, 0.2))),
        Sphere(Vector3(3, 0, 0), 1, Metal(Color(0.8, 0.8, 0.8), 0.0)),
        Sphere(Vector3(4, 0, 0), 1, Dielectric(1.5)),
        Sphere(Vector3(5, 0, 0), 1, Metal(Color(0.7, 0.7, 0.7), 0.1)),
    ]
    tables = build_scene_tables(spheres)
    assert tables.material_refs == [
        MaterialRef(MaterialType.LAMBERTIAN, 0),
        MaterialRef(MaterialType.METAL, 0),
        MaterialRef(MaterialType.LAMBERTIAN, 1),
        MaterialRef(MaterialType.MIRROR, 0),
        MaterialRef(MaterialType.DIELECTRIC, 0),
        MaterialRef(MaterialType.METAL, 1),
    ]
    assert tables.mirror_params == [(0.8, 0.8, 0.8)]
    assert tables.metal_params == [(0.9, 0.9, 0.9, 0.3), (0.7, 0.7, 0.7, 0.1)]
    assert tables.dielectric_params == [(1.0, 1.0, 1.0, 1.5)]


def test_shared_material_gets_one_row_per_sphere():
    shared = Lambertian(Color(0.3, 0.2, 0.1))
    spheres = [Sphere(Vector3(0, 0, 0), 1, shared), Sphere(Vector3(2, 0, 0), 1, shared)]
    tables = build_scene_tables(spheres)
    assert [ref.index for ref in tables.material_refs] == [0, 1]
    assert tables.lambertian_params == [(0.3, 0.2, 0.1), (0.3, 0.2, 0.1)]


def test_unknown_material_falls_back_to_first_lambertian():
    spheres = [
        Sphere(Vector3(0, -1000, 0), 1000, Lambertian(Color(0.5, 0.5, 0.5))),
        Sphere(Vector3(0, 1, 0), 1, Glow()),
        Sphere(Vector3(2, 1, 0), 1, Lambertian(Color(0.1, 0.2, 0.3))),
    ]
    tables = build_scene_tables(spheres)
    assert len(tables.material_refs) == 3
    assert tables.material_refs[1] == MaterialRef(MaterialType.LAMBERTIAN, 0)
    assert resolve_material_ref(tables, tables.material_refs[1]) == tables.lambertian_params[0]
    # The unknown material adds no row, so the next lambertian is still index 1
    assert tables.material_refs[2] == MaterialRef(MaterialType.LAMBERTIAN, 1)


def test_format_emits_tables_in_order():
    spheres = [
        Sphere(Vector3(0, -1000, 0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5))),
        Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)),
        Sphere(Vector3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)),
        Sphere(Vector3(1, 0.2, 1), 0.2, Metal(Color(0.5, 0.5, 0.5), 0.25)),
    ]
    text = format_scene_tables(build_scene_tables(spheres))
    headers = [
        "const vec4 spheres[] = {\n",
        "const MaterialRef sphere_materials[spheres.length()] = {\n",
        "const vec3 lambertian_params[] = {\n",
        "const vec3 mirror_params[] = {\n",
        "const vec4 metal_params[] = {\n",
        "const vec4 dielectric_params[] = {\n",
    ]
    positions = [text.index(h) for h in headers]
    assert positions == sorted(positions)
    assert "    {0f, -1000f, 0f, 1000f},\n" in text
    assert "    {1f, 0.2000000000000000111f, 1f, 0.2000000000000000111f},\n" in text
    assert "    {MT_LAMBERTIAN, 0us},\n" in text
    assert "    {MT_DIELECTRIC, 0us},\n" in text
    assert "    {MT_MIRROR, 0us},\n" in text
    assert "    {MT_METAL, 0us},\n" in text
    assert "    {0.500000f, 0.500000f, 0.500000f},\n" in text
    assert "    {0.700000f, 0.600000f, 0.500000f},\n" in text
    assert "    {0.500000f, 0.500000f, 0.500000f, 0.250000f},\n" in text
    assert "    {1.000000f, 1.000000f, 1.000000f, 1.500000f},\n" in text
    assert text.count("};\n") == 6


def test_write_scene_tables(tmp_path):
    _, spheres = random_scene(random.Random(4))
    tables = build_scene_tables(spheres)
    path = tmp_path / "scene.glsl"
    write_scene_tables(str(path), tables)
    assert path.read_text() == format_scene_tables(tables)


def test_to_arrays_shapes_and_codes():
    _, spheres = random_scene(random.Random(5))
    tables = build_scene_tables(spheres)
    arrays = tables.to_arrays()
    assert arrays['spheres'].shape == (len(spheres), 4)
    assert arrays['spheres'].dtype == np.float32
    assert arrays['material_refs'].shape == (len(spheres), 2)
    assert arrays['material_refs'].dtype == np.int32
    assert arrays['lambertian_params'].shape[1] == 3
    assert arrays['mirror_params'].shape == (len(tables.mirror_params), 3)
    assert arrays['metal_params'].shape[1] == 4
    assert arrays['dielectric_params'].shape[1] == 4
    # Ground sphere is the first lambertian
    assert list(arrays['material_refs'][0]) == [0, 0]


def test_to_arrays_handles_empty_tables():
    arrays = build_scene_tables([]).to_arrays()
    assert arrays['spheres'].shape == (0, 4)
    assert arrays['material_refs'].shape == (0, 2)
    assert arrays['mirror_params'].shape == (0, 3)


def test_fallback_reference_without_any_lambertian_cannot_resolve():
    tables = build_scene_tables([Sphere(Vector3(0, 1, 0), 1, Glow())])
    assert tables.material_refs == [MaterialRef(MaterialType.LAMBERTIAN, 0)]
    assert tables.lambertian_params == []
    with pytest.raises(IndexError):
        resolve_material_ref(tables, tables.material_refs[0])
