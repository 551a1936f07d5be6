import os, sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

from homogeneous_transforms import (
    Vector3, Affine3, Camera, Perspective, rotation, project_points
)

vertices = np.array([[-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
                     [-1, -1, 1], [1, -1, 1], [1, 1, 1], [-1, 1, 1]], dtype=float)
faces = np.array([[0, 1, 2, 3], [5, 4, 7, 6], [4, 0, 3, 7],
                  [1, 5, 6, 2], [3, 2, 6, 7], [4, 5, 1, 0]])

camera = Camera.looking_at(Vector3(0, 3, -6), Vector3(0, 0, 0),
                           Perspective(fov=60, aspect_ratio=1, near=0.5))
cube = Affine3.from_components(orientation=rotation(30, Vector3(1, 1, 0)),
                               scale=Vector3(1, 1.5, 1))

# one matrix per instance, one application per vertex
ndc, valid = project_points(camera.object_to_clip(cube), vertices)
faces = faces[valid[faces].all(axis=1)]

polygons = ndc[faces][:, :, :2]
depths = ndc[faces][:, :, 2].mean(axis=1)
colours = plt.cm.viridis(np.linspace(0, 1, len(faces)))

# reversed depth: far faces have the smaller value and are drawn first
indices = np.argsort(depths)
fig = plt.figure(figsize=(6, 6))
ax = fig.add_subplot(1, 1, 1, xlim=[-1, 1], ylim=[-1, 1], aspect=1,
                     frameon=False, xticks=[], yticks=[])
ax.add_collection(PolyCollection(polygons[indices], closed=True, linewidth=0.5,
                                 edgecolor='k', facecolor=colours[indices]))
fig.savefig('projected_cube.png', bbox_inches='tight', pad_inches=0)
