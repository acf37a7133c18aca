from setuptools import setup, find_namespace_packages
import re
from pathlib import Path

_version_re = re.compile(r"^__version__\s*(?::\s*[^=]+)?\s*=\s*['\"]([^'\"]+)['\"]", re.M)


def file_getVersion(rel_path: str) -> str:
    """
    Retrieve the version string from the specified file.
    """
    version_file = Path(rel_path)
    if not version_file.exists():
        raise RuntimeError(f"Version file {rel_path} not found.")

    with open(version_file, 'r') as f:
        content = f.read()
        match = _version_re.search(content)
        if not match:
            raise RuntimeError(f"Could not find __version__ in {rel_path}")
        return match.group(1)


setup(
    name='mudscript',
    version=file_getVersion('mudscript/mudscript.py'),
    description='Protocol tokenizer, script lexer and variable substitution for a MUD client',
    license='MIT',
    packages=find_namespace_packages(include=['mudscript', 'mudscript.*']),
    python_requires='>=3.11',
    install_requires=[
        'click>=8.1',
        'loguru>=0.7',
        'pydantic>=2.5',
        'pydantic-settings>=2.1',
        'rich>=13.0',
    ],
    entry_points={
        'console_scripts': [
            'mudscript = mudscript.mudscript:main'
        ]
    },
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Games/Entertainment :: Multi-User Dungeons (MUD)',
    ],
    extras_require={
        'none': [],
        'test': [
            'pytest>=7.1'
        ],
        'dev': [
            'pytest>=7.1'
        ]
    }
)
