from setuptools import setup, find_packages

setup(
   name="owned",
   version="0.1.0",
   python_requires=">=3.12",
   packages=find_packages(exclude=["tests", "tests.*"]),
   install_requires=[
      "boto3",
   ],
   extras_require={
      "test": [
         "pytest",
      ],
   },
)
