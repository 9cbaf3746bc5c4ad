from setuptools import setup, find_packages

with open('README.md') as f:
    readme = f.read()

setup(
    name='htmltagbuilder',
    version='0.1.0',
    description='htmltagbuilder module',
    long_description=readme,
    long_description_content_type='text/markdown',
    python_requires='>=3.9',
    packages=find_packages(exclude=('tests', 'docs')),
    extras_require={
        'test': ['pytest'],
    },
)
