import os

from setuptools import find_packages, setup

config_files = ['config/' + name for name in os.listdir('config')]
tests_require = ['pytest', 'pytest-cov', 'pycodestyle', 'pylint', 'hypothesis']
extras_require = {
    'test': tests_require,
}

setup(
    name='mswater',
    version='0.1.0',
    description='Surface water detection from WorldView multispectral imagery',
    long_description=open('README.rst', 'r').read(),
    license='Apache License 2.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    data_files=[('mswater/config', config_files)],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Scientific/Engineering :: Information Analysis",
    ],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'rasterio',
        'affine',
        'click',
        'PyYAML',
    ],
    tests_require=tests_require,
    extras_require=extras_require,
    entry_points={
        'console_scripts': [
              'mswater = mswater.mswater_app:cli',
        ]
    },
)
