from setuptools import setup, find_packages

# Get the long description from the README file
def readme():
    with open('README.md', encoding='utf-8') as f:
        return f.read()

setup(
    name='lowpoly',
    version='0.1.0',
    description='Low-poly triangulated backgrounds from gradients and images',
    long_description=readme(),
    long_description_content_type='text/markdown',
    license='MIT',
    packages=find_packages(exclude=['tests', '*.tests', '*.tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy>=1.16.0',
        'Pillow>=9.1',
        'requests>=2.20',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0',
            'pytest-cov>=2.10',
            'pytest-benchmark>=3.4',
            'matplotlib>=3.0',
        ],
        'plotting': [
            'matplotlib>=3.0',
        ],
    },
    keywords=['low-poly', 'triangulation', 'background', 'gradient',
              'procedural-art'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Multimedia :: Graphics',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    zip_safe=False,
)
