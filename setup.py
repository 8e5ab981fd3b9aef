import setuptools
import re
import pathlib

def read_file(name: str) -> str:
    return pathlib.Path(name).read_text(encoding='utf-8')


version = re.search(r"__version__ = '([0-9.]*)'", read_file('tmptation/__init__.py')).group(1)

requirements = read_file('requirements.txt')


setuptools.setup(
    name='tmptation',
    version=version,
    author='tmptation contributors',
    description='Temporary files and folders for tests, deleted in bulk and only inside the temp folder',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(exclude=['tests*']),
    install_requires=requirements,
    include_package_data=True,
    python_requires='>=3.10',
    entry_points={
        'console_scripts': [
            'tmptation = tmptation.cling:cli'
        ],
    },
    extras_require={
        'tests': {
            'pytest',
            'pytest-xdist',
            'pytest-html',
        },
    },
    classifiers=[
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: Implementation :: CPython',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Topic :: Software Development :: Testing',
    ],
)
