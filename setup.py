from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()


setup(name='homogeneous_transforms',
      version='0.1',
      packages=find_packages(exclude=['test', 'examples']),
      install_requires=['numpy'],
      extras_require={'test': ['pytest'],
                      'plot': ['matplotlib>=3.3.2']},
      package_dir={'homogeneous_transforms':'homogeneous_transforms'},
      python_requires='>=3.8',
      description="2D/3D affine and perspective transforms in homogeneous coordinates",
    long_description=long_description,
    long_description_content_type="text/markdown",
     )
