from setuptools import setup, find_packages
import os
from glob import glob

package_name = 'target_compass'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'test.*']),
    data_files=[
        # Config files
        (os.path.join('share', package_name, 'config'),
            glob('config/*.yaml')),
    ],
    install_requires=[
        'setuptools',
        'PyYAML',
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.8',
    zip_safe=True,
    maintainer='Your Name',
    maintainer_email='your.email@example.com',
    description='Point-to-target compass: GPS + heading fusion toward a fixed target',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'target_compass_demo = target_compass.nodes.demo_node:main',
        ],
    },
)
