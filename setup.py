import setuptools

setuptools.setup(
    name='roll',
    version='2.0.0',
    url='https://github.com/OwenFeik/roll.git',
    author='Owen Feik',
    author_email='owen.h.feik@gmail.com',
    description='For parsing and rolling dice expressions.',
    packages=setuptools.find_packages(exclude=['tests']),
    python_requires='>=3.8',
    install_requires=['pydantic-settings>=2.0'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['roll=roll.__main__:main']},
)
