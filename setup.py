from setuptools import setup, find_packages

setup(
    name="medart-media-service",
    version="1.0.0",
    description="Signed upload and image delivery URLs for the Medical Artists portfolio",
    author="Medical Artists Team",
    author_email="dev@medicalartists.co",
    packages=find_packages(include=["medart_commons", "medart_commons.*"], exclude=["*.tests", "*.tests.*"]),
    install_requires=[
        "boto3>=1.36.0",
        "pynamodb>=6.0.0",
        "Pillow>=10.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "moto[dynamodb,s3,ssm]>=5.0.0",
        ],
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.12",
    ],
)
