from setuptools import setup, find_packages
from setuptools.command.install import install



with open('requirements.txt') as f:
    requirements = f.read().splitlines()

#Show a warning if the mapping command of this platform is missing
class CustomInstall(install):
     def run(self):
        import platform
        import shutil
        if platform.system() == 'Windows':
            if not shutil.which('subst'):
                print("subst.exe was not found on PATH, virtual drives cannot be mapped")
        elif not shutil.which('mount'):
            print("mount was not found on PATH, bind mounts cannot be created")

        install.run(self)

setup(
    name='virtual_drive_check',
    version='1.0',
    packages=find_packages(include=['virtual_drive_check', 'virtual_drive_check.*']),
    description='Checks that a virtual drive (subst, bind mount) behaves exactly like the directory it maps',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Environment :: Console',
        'Intended Audience :: System Administrators',
        'Operating System :: POSIX :: Linux',
        'Operating System :: Microsoft :: Windows',
        'Topic :: System :: Filesystems'
    ],
    keywords='subst, virtual drive, bind mount, filesystem, equivalence',
    python_requires='>=3.11',
    install_requires=requirements,
    extras_require={'test': ['pytest']},
    cmdclass={'install':CustomInstall},
    entry_points={
        'console_scripts': [
            'virtual_drive_check=virtual_drive_check:cli',
        ],
    },
)
