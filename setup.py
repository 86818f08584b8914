# setup.py
from setuptools import setup, find_packages

setup(
    name="site_harvest",
    version="0.1.0",
    description="Обход сайтов через управляемый браузер и сбор данных страниц",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_harvest.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "fastapi>=0.110",
        "jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "uvicorn>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": ["site-harvest=site_harvest.cli:cli"],
    },
    python_requires=">=3.11",
)
