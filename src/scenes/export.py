# scenes/export.py
"""
Flatten generated spheres into the data tables an external shader includes.

Spheres are written in generation order. Each material is written to the
table of its kind (diffuse, mirror, fuzzy metal, glass) and each sphere gets a
MaterialRef pointing at its row. Rows are per sphere occurrence: two spheres
sharing one material object still get two rows.
"""
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple
import numpy as np
from geometry.sphere import Sphere
from materials.material import MaterialKind

class MaterialType(Enum):
    LAMBERTIAN = "MT_LAMBERTIAN"
    MIRROR = "MT_MIRROR"
    METAL = "MT_METAL"
    DIELECTRIC = "MT_DIELECTRIC"

class MaterialRef(NamedTuple):
    kind: MaterialType
    index: int

class SceneTables:
    def __init__(self):
        self.spheres: List[Tuple[float, float, float, float]] = []
        self.material_refs: List[MaterialRef] = []
        self.lambertian_params: List[Tuple[float, float, float]] = []
        self.mirror_params: List[Tuple[float, float, float]] = []
        self.metal_params: List[Tuple[float, float, float, float]] = []
        self.dielectric_params: List[Tuple[float, float, float, float]] = []

    def table_for(self, kind: MaterialType) -> list:
        return {
            MaterialType.LAMBERTIAN: self.lambertian_params,
            MaterialType.MIRROR: self.mirror_params,
            MaterialType.METAL: self.metal_params,
            MaterialType.DIELECTRIC: self.dielectric_params,
        }[kind]

    def to_arrays(self) -> dict:
        """numpy views of every table, ready to upload to a GPU consumer."""
        kind_codes = {kind: code for code, kind in enumerate(MaterialType)}
        return {
            'spheres': np.array(self.spheres, dtype=np.float32).reshape(-1, 4),
            'material_refs': np.array(
                [(kind_codes[ref.kind], ref.index) for ref in self.material_refs],
                dtype=np.int32).reshape(-1, 2),
            'lambertian_params': np.array(self.lambertian_params, dtype=np.float32).reshape(-1, 3),
            'mirror_params': np.array(self.mirror_params, dtype=np.float32).reshape(-1, 3),
            'metal_params': np.array(self.metal_params, dtype=np.float32).reshape(-1, 4),
            'dielectric_params': np.array(self.dielectric_params, dtype=np.float32).reshape(-1, 4),
        }

def classify_material(material) -> Optional[Tuple[MaterialType, tuple]]:
    """
    Output table and parameter row for a material, or None when the material
    is of a kind the tables cannot describe.
    """
    kind = getattr(material, 'kind', None)
    if kind is MaterialKind.LAMBERTIAN:
        return MaterialType.LAMBERTIAN, tuple(material.albedo)
    if kind is MaterialKind.METAL:
        if material.fuzz == 0:
            return MaterialType.MIRROR, tuple(material.albedo)
        return MaterialType.METAL, (*material.albedo, material.fuzz)
    if kind is MaterialKind.DIELECTRIC:
        return MaterialType.DIELECTRIC, (1.0, 1.0, 1.0, material.ir)
    return None

def build_scene_tables(spheres: Sequence[Sphere]) -> SceneTables:
    tables = SceneTables()
    for sphere_idx, sphere in enumerate(spheres):
        c = sphere.center
        tables.spheres.append((c.x, c.y, c.z, sphere.radius))

        classified = classify_material(sphere.material)
        if classified is None:
            # Unknown material type so reference the first lambertian as a fallback;
            # that row only exists once some sphere has a lambertian material
            print(f"Warning: sphere {sphere_idx} has unsupported material {sphere.material!r}, "
                  f"referencing lambertian 0")
            tables.material_refs.append(MaterialRef(MaterialType.LAMBERTIAN, 0))
            continue

        kind, params = classified
        table = tables.table_for(kind)
        tables.material_refs.append(MaterialRef(kind, len(table)))
        table.append(params)
    return tables

def resolve_material_ref(tables: SceneTables, ref: MaterialRef) -> tuple:
    """
    Parameter row a MaterialRef points at. The unknown-material fallback
    reference (lambertian 0) raises IndexError when the scene has no
    lambertian sphere at all; generated scenes always start with the
    lambertian ground sphere.
    """
    return tables.table_for(ref.kind)[ref.index]

def _sphere_float(value: float) -> str:
    return format(value, '.20g') + "f"

def _param_float(value: float) -> str:
    return f"{value:f}f"

def _rows(rows, fmt) -> str:
    return "".join("    {" + ", ".join(fmt(v) for v in row) + "},\n" for row in rows)

def format_scene_tables(tables: SceneTables) -> str:
    """Render the tables as array literals for inclusion in shader source."""
    out = ["// Our scene (a sphere is {x,y,z,radius}):\n",
           "const vec4 spheres[] = {\n",
           _rows(tables.spheres, _sphere_float),
           "};\n",
           "\n\n"]

    out.append("const MaterialRef sphere_materials[spheres.length()] = {\n")
    out.extend(f"    {{{ref.kind.value}, {ref.index}us}},\n" for ref in tables.material_refs)
    out.append("};\n\n")

    out.append("const vec3 lambertian_params[] = {\n")
    out.append(_rows(tables.lambertian_params, _param_float))
    out.append("};\n\n")

    out.append("const vec3 mirror_params[] = {\n")
    out.append(_rows(tables.mirror_params, _param_float))
    out.append("};\n\n")

    out.append("/// {R,G,B,Fuzziness}\n")
    out.append("const vec4 metal_params[] = {\n")
    out.append(_rows(tables.metal_params, _param_float))
    out.append("};\n\n")

    out.append("/// {R,G,B, Index of Refraction}\n")
    out.append("const vec4 dielectric_params[] = {\n")
    out.append(_rows(tables.dielectric_params, _param_float))
    out.append("};\n\n")
    return "".join(out)

def write_scene_tables(path: str, tables: SceneTables):
    with open(path, "w") as f:
        f.write(format_scene_tables(tables))
