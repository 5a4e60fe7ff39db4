"""Default word list.

Pictures live in an ``assets`` folder next to the page; the file names must
match the ones below.
"""

from ..domain.words import WordEntry

INITIAL_WORDS = (
    WordEntry('bed', category='Home', emoji='\U0001F6CF\uFE0F', image_url='./assets/bed.png'),
    WordEntry('cat', category='Animals', emoji='\U0001F431', image_url='./assets/cat.png'),
    WordEntry('ball', category='Toys', emoji='\u26BD', image_url='./assets/ball.png'),
    WordEntry('doll', category='Toys', emoji='\U0001F9F8', image_url='./assets/doll.png'),
    WordEntry('dog', category='Animals', emoji='\U0001F436', image_url='./assets/dog.png'),
    WordEntry('bear', category='Animals', emoji='\U0001F43B', image_url='./assets/bear.png'),
    WordEntry('chair', category='Home', emoji='\U0001FA91', image_url='./assets/chair.png'),
    WordEntry('sitting', category='Actions', emoji='\U0001F9D8', image_url='./assets/sitting.png'),
    WordEntry('on', category='Position', emoji='\U0001F51B', image_url='./assets/on.png'),
    WordEntry('socks', category='Clothes', emoji='\U0001F9E6', image_url='./assets/socks.png'),
)
