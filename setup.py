"""
Live Filter - Setup Script
"""
from setuptools import setup, find_namespace_packages
import os

# Read long description from README
def read_long_description():
    here = os.path.abspath(os.path.dirname(__file__))
    try:
        with open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return "Live text-driven filtering for list and table views"

# Read requirements
def read_requirements():
    here = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(here, 'requirements.txt'), encoding='utf-8') as f:
        requirements = []
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                requirements.append(line)
        return requirements

setup(
    name='live-filter',
    version='1.0.0',
    description='Live text-driven filtering of list and table views',
    long_description=read_long_description(),
    long_description_content_type='text/markdown',

    author='Live Filter Contributors',

    license='MIT',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Operating System :: OS Independent',
    ],

    keywords='qt pyside6 filter list table model search',

    # Packages are imported as src.core, src.ui, ... (no __init__.py files)
    packages=find_namespace_packages(include=['src', 'src.*']),

    python_requires='>=3.9',

    install_requires=read_requirements(),

    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-qt>=4.2.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
        ],
        'test': [
            'pytest>=7.4.0',
            'pytest-qt>=4.2.0',
        ],
    },

    entry_points={
        'gui_scripts': [
            'live-filter=src.main:main',
        ],
    },
)
