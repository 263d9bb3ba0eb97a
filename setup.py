# #!/usr/bin/env python

"""setup.py script for py_eulercalc library"""

from setuptools import setup, find_packages

setup(
    name='py_eulercalc',
    version='1.0.0',
    description="Euler's method step tables and direction fields for y' = f(x, y)",
    python_requires='>=3.9',
    packages=find_packages(include=['py_eulercalc', 'py_eulercalc.*']),
    install_requires=[
        'typing_extensions>=4.12.2',
        'sympy>=1.12',
        'tomli>=2.0.1; python_version<"3.11"',
    ],
    extras_require={
        'visualize': [
            'matplotlib',
            'pandas',
        ],
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'pyec=py_eulercalc.__main__:main',
        ],
    },
)
