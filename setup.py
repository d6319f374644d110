#!/usr/bin/env python

from setuptools import setup, find_packages

setup(name='dlinalg',
      version='1.0.0',

      # Description of the package
      description='Dense vectors and matrices with BLAS kernels and MPI '
                  'synchronisation',
      keywords='blas dense linear algebra mpi',
      classifiers=["Development Status :: 4 - Beta",
                   "Environment :: Console",
                   "Intended Audience :: Science/Research",
                   "Natural Language :: English",
                   "Programming Language :: Python :: 3",
                   "Topic :: Scientific/Engineering :: Mathematics",
                   ],
      python_requires='>=3.8',
      install_requires=['numpy >=1.20',
                        'scipy',
                        'h5py >=2.10',
                        'configobj',
                        'mpi4py'],
      extras_require={'test': ['pytest']},

      # Contents, build and deployment instructions
      packages=find_packages(include=['dlinalg', 'dlinalg.*']),
      package_data={'dlinalg.auxiliaries': ['configspec']},
      scripts=['LinAlg.py'],
     )
