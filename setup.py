from setuptools import find_packages, setup

setup(
    name='flexcss',
    version='0.1.0',
    description="A CSS subset for styling flexbox UI nodes: stylesheets, selectors and typed property values",
    package_dir={ '': 'src' },
    packages=find_packages('src'),
    python_requires='>=3.11',
    install_requires=[ 'tinycss2>=1.2' ], # Colour resolution
    extras_require={ 'test': [ 'pytest' ] },
)
