"""Setup script for kiosklogin, the Windows kiosk login provisioning tool."""

from pathlib import Path

from setuptools import find_packages, setup
from setuptools.command.develop import develop
from setuptools.command.install import install


def post_install_message():
    """Show next steps after installation."""
    print("\n" + "=" * 60)
    print("🖥️  kiosklogin Installation Complete!")
    print("=" * 60)
    print("\n🔧 Next Steps:")
    print("1. Run 'kiosklogin --setup' to write kiosk-config.json")
    print("2. Optionally run 'kiosklogin --create-password-file kiosk.pwd'")
    print("3. Run 'kiosklogin --dry-run' to preview, then 'kiosklogin' from an elevated prompt")
    print("=" * 60)


class PostInstallCommand(install):
    """Custom install command with post-install message."""

    def run(self):
        install.run(self)
        post_install_message()


class PostDevelopCommand(develop):
    """Custom develop command with post-install message."""

    def run(self):
        develop.run(self)
        post_install_message()


# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Read requirements, separating test dependencies
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []
dev_requirements = []

if requirements_file.exists():
    for line in requirements_file.read_text().strip().split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "pytest" in line:
            dev_requirements.append(line)
        else:
            requirements.append(line)

setup(
    name="kiosklogin",
    version="1.0.0",
    description="Provision a Windows kiosk login with a browser launched in kiosk mode",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="kiosklogin maintainers",
    # Package configuration
    packages=find_packages(exclude=["tests*", "docs*"]),
    include_package_data=True,
    # Dependencies
    install_requires=requirements,
    extras_require={
        "dev": dev_requirements,
        "test": dev_requirements,
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Environment :: Win32 (MS Windows)",
        "Intended Audience :: System Administrators",
        "Operating System :: Microsoft :: Windows :: Windows 10",
        "Operating System :: Microsoft :: Windows :: Windows 11",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Installation/Setup",
        "Topic :: System :: Systems Administration",
    ],
    keywords="windows kiosk autologin edge chrome scheduled-task provisioning",
    entry_points={
        "console_scripts": [
            "kiosklogin=kiosklogin.__main__:main",
        ],
    },
    cmdclass={
        "install": PostInstallCommand,
        "develop": PostDevelopCommand,
    },
    zip_safe=False,
    platforms=["win32"],
)
