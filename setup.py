from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'mailroom_robots'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'test.*']),
    data_files=[
        # Config files
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    python_requires='>=3.8',
    install_requires=[
        'setuptools',
        'numpy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='Your Name',
    maintainer_email='your.email@example.com',
    description='Discrete-time simulation of mailroom delivery robots',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'mailroom_sim = mailroom_robots.cli:main',
        ],
    },
)
