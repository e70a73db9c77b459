from setuptools import setup
import os
from glob import glob

package_name = 'encoder_to_odom'

setup(
    name=package_name,
    version='1.1.0',
    packages=[package_name],
    data_files=[
        (os.path.join('share', package_name, 'config'), glob('config/*.yaml')),
    ],
    install_requires=['setuptools', 'numpy', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='Robot Developer',
    maintainer_email='your.email@example.com',
    description='Differential drive odometry from absolute wheel encoder angle readings',
    license='Apache-2.0',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'encoder_odometry_replay = encoder_to_odom.main:main',
        ],
    },
)
