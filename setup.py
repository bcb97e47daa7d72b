import setuptools

setuptools.setup(
    name="sshutil",
    version="0.1.0",
    author="LaczenJMS",
    description=("SSH client credential helpers: private key loading, "
                 "password prompts and agent access"),
    license="Apache Software License",
    url="",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        'pycryptodome>=3.18',
        'paramiko>=2.7',
        'click',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        "console_scripts": ["sshutil=sshutil.main:sshutil"]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Development Status :: 4 - Beta",
        "Topic :: Security :: Cryptography",
        "License :: OSI Approved :: Apache Software License",
    ],
)
