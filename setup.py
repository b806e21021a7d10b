from setuptools import setup, find_packages


setup(
    name='rigidkit',
    version='1.0.0',
    description='Rotation representations and rigid body mechanics with numeric or symbolic content',
    packages=find_packages(exclude=['unittests', 'unittests.*']),
    python_requires='>=3.11',
    install_requires=['numpy', 'sympy'],
    extras_require={'test': ['pytest', 'scipy']},
)
