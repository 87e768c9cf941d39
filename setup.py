from setuptools import find_packages, setup

setup(
    name='decometa',
    version='0.1.0',
    packages=find_packages(exclude=['test', 'test.*']),
    python_requires='>=3.12',
    license='mit',
    description='Python 3.12+ class decoration pipeline with inherited per-class metadata',
    extras_require={
        'base': (base := ['annotated-types']),
        'test': (test := base + ['pytest', 'pytest-asyncio', 'pytest-cov']),
    },
    install_requires=base,
)
